"""
Configuration Loader
Loads configuration from config.yaml and provides easy access to settings
"""

import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, List

from dotenv import load_dotenv

from utils.log_handler import LineRotatingFileHandler

ENV_OVERRIDES = {
    "POVERTY_BASE_URL": ("source", "base_url", str),
    "POVERTY_TIMEOUT_SECONDS": ("source", "timeout_seconds", float),
}


class Config:
    """Config manager for the poverty ingestion pipeline"""

    def _get_project_root(self) -> Path:
        return Path(__file__).parent.parent.parent

    def _get_default_config_path(self):
        """Get default config path"""
        return self._get_project_root() / "configs" / "config.yaml"

    def __init__(self, config_path: str = None):
        if config_path is None:
            config_path = self._get_default_config_path()
        self.config_path = Path(config_path)
        self.config = self._load_config()
        self._apply_env_overrides()
        self._resolve_paths()

    def _load_config(self) -> Dict[str, Any]:
        """Load YAML config file"""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")
        with open(self.config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def _apply_env_overrides(self):
        """Let environment variables (or a .env file) override source settings"""
        load_dotenv()
        for env_name, (section, key, cast) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                self.config.setdefault(section, {})[key] = cast(value)

    def _resolve_paths(self):
        """Convert relative folder paths to absolute paths"""
        project_root = self._get_project_root()
        self.outputs_folder = (project_root / self.config.get('outputs_folder', 'outputs')).resolve()
        self.logs_folder = (project_root / self.config.get('logs_folder', 'logs')).resolve()

    def _create_directories(self):
        """Create the output and log directories"""
        self.outputs_folder.mkdir(parents=True, exist_ok=True)
        self.logs_folder.mkdir(parents=True, exist_ok=True)

    @property
    def source_config(self) -> Dict[str, Any]:
        """Download settings: base URL, file name template, timeout, user agent"""
        return self.config['source']

    @property
    def table_layouts(self) -> Dict[str, Dict]:
        """Per-table layout overrides keyed by extractor name"""
        return self.config.get('tables', {})

    @property
    def target_regions(self) -> List[str]:
        return self.config.get('regions', [])

    @property
    def expected_min_records(self) -> int:
        """Below this count a run is reported as degraded"""
        return int(self.config.get('expected_min_records', 0))

    @property
    def records_path(self) -> Path:
        """Default output path for extracted records"""
        return self.outputs_folder / self.config.get('records_filename', 'poverty_records.json')

    def get_log_path(self, log_name: str) -> Path:
        """Get path for a named log file"""
        return self.logs_folder / f"{log_name}.log"

    def _create_file_handler(self, log_path: Path, max_lines: int):
        """Create and configure file handler"""
        file_handler = LineRotatingFileHandler(log_path, max_lines=max_lines, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_formatter)
        return file_handler

    def _create_console_handler(self):
        """Create and configure console handler"""
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s"
        )
        console_handler.setFormatter(console_formatter)
        return console_handler

    def _setup_base_logger(self, logger_name: str):
        """Setup base logger, closing any handlers from a previous setup"""
        logger = logging.getLogger(logger_name or __name__)
        logger.setLevel(logging.INFO)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        return logger

    def setup_logger(
        self, log_name: str, logger_name: str = None, max_lines: int = 3000):
        """Setup logger with line-rotating file handler and console handler"""
        self._create_directories()
        logger = self._setup_base_logger(logger_name)
        logger.addHandler(self._create_file_handler(self.get_log_path(log_name), max_lines))
        logger.addHandler(self._create_console_handler())
        return logger

    def __repr__(self):
        return (
            f"Config(source={self.source_config.get('base_url')}, "
            f"outputs={self.outputs_folder})"
        )


def load_config(config_path: str = None) -> Config:
    """Load configuration from YAML file"""
    return Config(config_path)
