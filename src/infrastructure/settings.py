"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional

import dotenv

from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


DEFAULT_ACCURATE_HOST = "https://zeus.accurate.id"


@dataclass(frozen=True)
class AppSettings:
    """Settings for COA sources and the Accurate API.

    Attributes:
        coa_source: Source identifier (accurate or spreadsheet).
        accurate_host: Base URL of the Accurate API host.
        accurate_secret_key: Secret used to sign Accurate API requests.
        accurate_page_size: Records requested per Accurate API page.
        accurate_timeout: Request timeout in seconds.
        import_file: Optional spreadsheet to import accounts from.
    """

    coa_source: str = "accurate"
    accurate_host: str = DEFAULT_ACCURATE_HOST
    accurate_secret_key: Optional[str] = None
    accurate_page_size: int = 100
    accurate_timeout: float = 30.0
    import_file: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Build settings from environment variables.

        Returns:
            AppSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        coa_source = os.getenv("COA_SOURCE", "accurate").strip().lower()
        host = os.getenv("ACCURATE_HOST", DEFAULT_ACCURATE_HOST).strip()
        raw_import = os.getenv("COA_IMPORT_FILE")
        import_file = None
        if raw_import:
            import_file = cls._normalize_path(raw_import, logger=logger)
        else:
            import_file = cls._default_import_file(logger=logger)
        return cls(
            coa_source=coa_source,
            accurate_host=host.rstrip("/"),
            accurate_secret_key=os.getenv("ACCURATE_SECRET_KEY") or None,
            accurate_page_size=cls._parse_int(
                os.getenv("ACCURATE_PAGE_SIZE"),
                default=100,
                logger=logger,
            ),
            accurate_timeout=float(
                cls._parse_int(
                    os.getenv("ACCURATE_TIMEOUT"),
                    default=30,
                    logger=logger,
                )
            ),
            import_file=import_file,
        )

    @staticmethod
    def _parse_int(raw: str | None, default: int, logger) -> int:
        """Parse a positive integer setting, falling back to a default."""
        if not raw:
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid integer setting '{raw}', using {default}")
            return default
        return value if value > 0 else default

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize the spreadsheet path.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Absolute filesystem path.
        """
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Import file does not exist at {path}")
        return path

    @staticmethod
    def _default_import_file(logger) -> Path | None:
        """Return a default spreadsheet when exactly one sits in data/.

        Args:
            logger: Logger used for warnings.

        Returns:
            Path | None: Default path if a single workbook is found.
        """
        data_dir = get_project_root() / "data"
        if not data_dir.exists():
            return None
        matches = sorted(data_dir.glob("*.xlsx"))
        if len(matches) == 1:
            return matches[0].resolve()
        if len(matches) > 1:
            logger.warning(
                "Multiple .xlsx files found in data/. "
                "Set COA_IMPORT_FILE to choose one."
            )
        return None


__all__ = ["AppSettings", "DEFAULT_ACCURATE_HOST"]
