"""
Configuration management using Pydantic Settings with safe access wrapper
"""
import codecs

from pydantic_settings import BaseSettings
from typing import List, Optional, Any

KNOWN_NER_BACKENDS = ("spacy", "transformers")


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Patient Information Extractor"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = "production"

    # NER settings
    ner_enabled: bool = True
    ner_backends: List[str] = ["spacy", "transformers"]
    spacy_model: str = "en_core_web_sm"
    spacy_auto_download: bool = False
    hf_ner_model: str = "dslim/bert-base-NER"
    hf_max_length: int = 512
    enable_gpu: bool = False
    max_text_length: int = 1000000

    # Extraction settings
    # None keeps the whole rest of the line after a birth cue
    birth_context_max_chars: Optional[int] = None
    min_claim_id_length: int = 6
    name_fallback_on_empty: bool = False
    document_encoding: str = "utf-8"

    # Logging settings
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_file: str = "patient_extractor.log"
    log_file_max_bytes: int = 10485760
    log_file_backup_count: int = 10

    # Monitoring
    enable_metrics: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"   # allow unknown env vars without error

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._validated = False
        self.validate_settings()

    def validate_settings(self):
        """Validate critical settings on startup"""
        if self._validated:
            return

        errors = []

        if self.environment not in ["development", "testing", "production"]:
            errors.append(f"Invalid environment: {self.environment}")

        unknown = [name for name in self.ner_backends if name not in KNOWN_NER_BACKENDS]
        if unknown:
            errors.append(f"Invalid NER backends: {unknown}. Valid options: {list(KNOWN_NER_BACKENDS)}")

        if self.birth_context_max_chars is not None and self.birth_context_max_chars < 1:
            errors.append("birth_context_max_chars must be positive")

        if self.min_claim_id_length < 6:
            errors.append("min_claim_id_length must be at least 6")

        if self.hf_max_length < 8:
            errors.append("hf_max_length must be at least 8")

        try:
            codecs.lookup(self.document_encoding)
        except LookupError:
            errors.append(f"Unknown document_encoding: {self.document_encoding}")

        if errors:
            raise ValueError(f"Configuration errors: {'; '.join(errors)}")

        self._validated = True


class SafeSettings:
    """Safe wrapper for settings with fallback defaults"""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._defaults = {
            "spacy_model": "en_core_web_sm",
            "ner_enabled": True,
            "ner_backends": ["spacy", "transformers"],
            "hf_ner_model": "dslim/bert-base-NER",
            "hf_max_length": 512,
            "max_text_length": 1000000,
            "min_claim_id_length": 6,
            "document_encoding": "utf-8",
            "log_level": "INFO",
            "log_dir": "logs",
            "environment": "production",
            "debug": False,
            "enable_metrics": True,
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Safely get setting value with fallback"""
        try:
            value = getattr(self._settings, key, None)
            if value is None:
                value = self._defaults.get(key, default)
            return value
        except Exception:
            return self._defaults.get(key, default)

    def __getattr__(self, key: str) -> Any:
        """Proxy attribute access with safety"""
        return self.get(key)

    @property
    def raw(self) -> Settings:
        """Get raw settings object"""
        return self._settings


# Initialize settings with safety wrapper
_raw_settings = Settings()
settings = SafeSettings(_raw_settings)
