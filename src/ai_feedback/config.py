# src/ai_feedback/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    # LLM Providers
    openai_api_key: str | None = None
    gemini_api_key: str | None = None
    default_provider: str = "openai"

    # Models and limits per mode
    quick_model: str = "gpt-4o-mini"
    report_model: str = "gpt-4o"
    gemini_model: str = "gemini-2.5-flash"
    quick_timeout: float = 25.0
    report_timeout: float = 40.0
    quick_max_prompt: int = 8192
    report_max_prompt: int = 16384
    max_file_chars: int = 2048
    max_retries: int = 2

    # Files
    responses_dir: str = "responses"
    supported_extensions: list[str] = [
        ".js", ".ts", ".cpp", ".c", ".java", ".py", ".cs", ".json", ".html", ".css", ".md",
    ]
    template_path: str | None = None
    pdf_command: str = "wkhtmltopdf"
    pdf_timeout: float = 60.0

    log_level: str = "INFO"
