from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "local"
    app_log_level: str = "INFO"
    host: str = "0.0.0.0"

    # Webhook relay (Tavus -> n8n)
    port: int = 4000
    tavus_webhook_path: str = "/tavus/webhook"

    # Downstream n8n Webhook Trigger. Unset means forwarding is disabled.
    n8n_webhook_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("N8N_WEBHOOK_URL", "VITE_N8N_WEBHOOK_URL", "n8n_webhook_url"),
    )
    # None -> urllib's default socket timeout
    n8n_forward_timeout_seconds: float | None = None

    # Tavus CVI
    tavus_api_key: str | None = None
    tavus_base_url: str = "https://tavusapi.com/v2"
    tavus_replica_id: str = "r92debe21318"
    tavus_llm_model: str = "tavus-gpt-4o"
    tavus_perception_model: str = "raven-0"
    tavus_tts_engine: str = "elevenlabs"

    # Coaching session API (signup / call / feedback)
    coaching_port: int = 8000

    # LLM (post-call feedback)
    llm_provider: str = "openai"
    llm_model_name: str = "gpt-4o-mini"
    openai_api_key: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
