# DEPENDENCIES
import sys
from typing import Any
from typing import Dict
from typing import Tuple
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.settings import settings


class InputValidator:
    """
    Validate analysis requests before they reach the engine
    """
    @staticmethod
    def validate_text(text: Any, max_length: Optional[int] = None) -> Tuple[bool, str, str]:
        """
        Check that text is a non-blank string within the length limit

        Arguments:
        ----------
            text       { str } : Candidate text

            max_length { int } : Character limit override (optional)

        Returns:
        --------
               { tuple }       : (is_valid, validation_type, message) tuple
        """
        max_length = max_length or settings.MAX_TEXT_LENGTH

        if not isinstance(text, str) or not text.strip():
            return (False, "invalid_input", "Text parameter is required and must be a non-empty string")

        if (len(text) > max_length):
            return (False, "too_long", f"Text must be less than {max_length:,} characters")

        return (True, "valid", "Text accepted for analysis")


    @staticmethod
    def validate_batch(texts: Any, max_batch_size: Optional[int] = None) -> Tuple[bool, str, str]:
        """
        Check that a batch is a list with between 1 and max_batch_size items
        """
        max_batch_size = max_batch_size or settings.MAX_BATCH_SIZE

        if not isinstance(texts, list) or not (1 <= len(texts) <= max_batch_size):
            return (False, "invalid_input", f"Texts must be an array with 1-{max_batch_size} items")

        return (True, "valid", "Batch accepted for analysis")


    @staticmethod
    def normalize_preferences(user_preferences: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Caller preferences laid over the configured defaults, ignoring unset values
        """
        preferences = settings.default_preferences()

        for key, value in (user_preferences or {}).items():
            if value is not None:
                preferences[key] = value

        return preferences


    @staticmethod
    def status_code_for(validation_type: str) -> int:
        """
        HTTP status matching a failed validation
        """
        return {"too_long"      : 413,
                "invalid_input" : 400,
               }.get(validation_type, 400)
