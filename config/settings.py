# DEPENDENCIES
from pathlib import Path
from pydantic import Field
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application-wide settings: primary configuration source
    """
    # Application Info
    APP_NAME                     : str           = "Terms Risk Analyzer"
    APP_VERSION                  : str           = "1.0.0"
    ENGINE_NAME                  : str           = "Deterministic Risk Engine v1.0"

    # Server Configuration
    HOST                         : str           = "0.0.0.0"
    PORT                         : int           = 3000
    RELOAD                       : bool          = False
    WORKERS                      : int           = 1

    # CORS Settings
    CORS_ORIGINS                 : list          = []
    CORS_ORIGIN_REGEX            : str           = r"^(chrome-extension://[a-z]+|https?://(localhost|127\.0\.0\.1)(:\d+)?)$"
    CORS_ALLOW_CREDENTIALS       : bool          = True
    CORS_ALLOW_METHODS           : list          = ["*"]
    CORS_ALLOW_HEADERS           : list          = ["*"]

    # Analysis Limits
    MAX_TEXT_LENGTH              : int           = 50000
    MAX_BATCH_SIZE               : int           = 10
    DEFAULT_LANGUAGE             : str           = "en"

    # Default User Preferences
    DEFAULT_PRIVACY_WEIGHT       : float         = Field(default = 0.4, ge = 0.0, le = 1.0)
    DEFAULT_LEGAL_RIGHTS_WEIGHT  : float         = Field(default = 0.4, ge = 0.0, le = 1.0)
    DEFAULT_CONVENIENCE_WEIGHT   : float         = Field(default = 0.2, ge = 0.0, le = 1.0)
    DEFAULT_RISK_THRESHOLD       : int           = 50
    DEFAULT_ENABLE_NOTIFICATIONS : bool          = True

    # Logging Settings
    LOG_LEVEL                    : str           = "INFO"
    LOG_DIR                      : Path          = Path("logs")
    LOG_APP_NAME                 : str           = "risk_engine"


    class Config:
        env_file          = ".env"
        env_file_encoding = "utf-8"
        case_sensitive    = True


    def default_preferences(self) -> dict:
        """
        User preference defaults applied beneath caller-supplied values
        """
        return {"privacy_weight"       : self.DEFAULT_PRIVACY_WEIGHT,
                "legal_rights_weight"  : self.DEFAULT_LEGAL_RIGHTS_WEIGHT,
                "convenience_weight"   : self.DEFAULT_CONVENIENCE_WEIGHT,
                "risk_threshold"       : self.DEFAULT_RISK_THRESHOLD,
                "enable_notifications" : self.DEFAULT_ENABLE_NOTIFICATIONS,
               }


# Global settings instance
settings = Settings()
