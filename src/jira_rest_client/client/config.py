"""Configuration for the Jira REST client."""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = {"DEBUG", "INFO", "NOTICE", "WARNING", "ERROR", "CRITICAL", "ALERT", "EMERGENCY"}


class JiraConfig(BaseSettings):
    """Configuration for the Jira REST client.

    All settings can be configured via environment variables with the JIRA_
    prefix, or from a .env file in the working directory. The variable names
    used by older deployments (JIRA_PASS, TOKEN_BASED_AUTH, COOKIE_FILE, ...)
    are accepted as aliases.

    Authentication (first match wins per request):
        - Cookie jar: COOKIE_AUTH_ENABLED=true and an existing COOKIE_FILE
        - Bearer token: TOKEN_BASED_AUTH=true and PERSONAL_ACCESS_TOKEN
        - Basic: JIRA_USER / JIRA_PASS

    TLS and proxy:
        - JIRA_SSL_VERIFY_HOST / JIRA_SSL_VERIFY_PEER
        - JIRA_SSL_CERT / JIRA_SSL_KEY (+ passwords) for client certificates
        - JIRA_PROXY_SERVER / JIRA_PROXY_PORT (+ credentials)
    """

    model_config = SettingsConfigDict(
        env_prefix="JIRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field(default="http://localhost:8080")
    use_v3_rest_api: bool = Field(
        default=False,
        validation_alias=AliasChoices("JIRA_USE_V3_REST_API", "JIRA_REST_API_V3"),
    )

    # Credentials
    user: str | None = Field(default=None)
    password: str | None = Field(
        default=None,
        validation_alias=AliasChoices("JIRA_PASSWORD", "JIRA_PASS"),
    )
    token_based_auth: bool = Field(
        default=False,
        validation_alias=AliasChoices("JIRA_TOKEN_BASED_AUTH", "TOKEN_BASED_AUTH"),
    )
    personal_access_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("JIRA_PERSONAL_ACCESS_TOKEN", "PERSONAL_ACCESS_TOKEN"),
    )
    cookie_auth_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("JIRA_COOKIE_AUTH_ENABLED", "COOKIE_AUTH_ENABLED"),
    )
    cookie_file: str = Field(
        default="jira-cookie.txt",
        validation_alias=AliasChoices("JIRA_COOKIE_FILE", "COOKIE_FILE"),
    )

    # TLS
    ssl_verify_host: bool = Field(default=True)
    ssl_verify_peer: bool = Field(default=True)
    ssl_cert: str | None = Field(default=None, description="Client certificate (PEM)")
    ssl_cert_password: str | None = Field(default=None)
    ssl_key: str | None = Field(default=None, description="Client private key (PEM)")
    ssl_key_password: str | None = Field(default=None)

    # Transport
    timeout: float = Field(default=30.0, ge=1.0, le=300.0, description="Connect timeout (seconds)")
    read_timeout: float | None = Field(
        default=None,
        ge=1.0,
        description="Read timeout (seconds). Unset means wait indefinitely.",
    )
    user_agent: str = Field(default="jira-rest-client")
    verbose: bool = Field(default=False)
    follow_redirects: bool = Field(
        default=True,
        description="Disable when the runtime forbids following redirects",
    )

    # Proxy
    proxy_server: str | None = Field(default=None)
    proxy_port: int | None = Field(default=None, ge=1, le=65535)
    proxy_user: str | None = Field(default=None)
    proxy_password: str | None = Field(default=None)

    # Logging
    log_enabled: bool = Field(default=True)
    log_file: str | None = Field(default=None)
    log_level: str = Field(default="WARNING")

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validate host URL format and strip trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Host must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level name."""
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @property
    def proxy_enabled(self) -> bool:
        """Check if a proxy server is configured."""
        return bool(self.proxy_server)

    @property
    def proxy_url(self) -> str | None:
        """Proxy URL assembled from server and port, or None."""
        if not self.proxy_enabled:
            return None
        server = self.proxy_server
        if "://" not in server:
            server = f"http://{server}"
        if self.proxy_port:
            return f"{server.rstrip('/')}:{self.proxy_port}"
        return server

    def validate_config(self) -> None:
        """Validate that required settings are present for the chosen auth mode.

        Raises:
            ValueError: If token auth is enabled without a token, or a client
                key is configured without its certificate.
        """
        if self.token_based_auth and not self.personal_access_token:
            raise ValueError(
                "Token authentication requires PERSONAL_ACCESS_TOKEN to be set. "
                "Example: PERSONAL_ACCESS_TOKEN=abc123"
            )
        if self.ssl_key and not self.ssl_cert:
            raise ValueError(
                "JIRA_SSL_KEY requires JIRA_SSL_CERT to be set. "
                "Example: JIRA_SSL_CERT=client.pem"
            )
