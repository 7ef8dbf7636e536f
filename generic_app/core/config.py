from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "generic-app"
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    database_url: str = "sqlite:///./generic_app.db"

    # Build-time output locations, relative to the project root
    schema_path: str = "prisma/schema.prisma"
    dashboard_dir: str = "src/app/dashboard"
    domain_config_path: str | None = None

    cloudinary_url: str | None = None
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_folder: str = "uploads"

    @property
    def has_cloudinary_credentials(self) -> bool:
        if self.cloudinary_url:
            return True
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )

settings = Settings()
