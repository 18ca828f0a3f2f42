from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Doctors Portal"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    PORT: int = 5000

    # Document store
    MONGODB_URL: str = "mongodb://localhost:27017"
    DB_USER: Optional[str] = None
    DB_PASS: Optional[str] = None
    DB_CLUSTER: str = "cluster0.ldgxyyy.mongodb.net"
    DATABASE_NAME: str = "doctorsPortal"

    # Collections
    APPOINTMENT_OPTIONS_COLLECTION: str = "availableAppointments"
    BOOKINGS_COLLECTION: str = "bookingAppointments"
    USERS_COLLECTION: str = "users"

    # Security
    ACCESS_TOKEN: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 5

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    @property
    def get_mongodb_url(self) -> str:
        """Return the Atlas URL when credentials are configured, else MONGODB_URL."""
        if self.DB_USER and self.DB_PASS:
            return (
                f"mongodb+srv://{self.DB_USER}:{self.DB_PASS}@{self.DB_CLUSTER}"
                "/?retryWrites=true&w=majority"
            )
        return self.MONGODB_URL

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
