from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout: float = 30.0
    port: int = 3000
    host: str = "0.0.0.0"
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        frozen = True

settings = Settings()
