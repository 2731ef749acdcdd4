"""
YAML configuration parser for fastfind.

This module loads, validates and saves the YAML configuration file. A missing
or invalid file never stops a search: ``load_with_safeguard`` falls back to
the defaults and writes them back so the user has a valid file to edit.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from ..models.config import FinderConfig, validate_config_dict


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        config: The parsed and validated configuration
        warnings: List of non-fatal warnings
        config_path: Path to the configuration file used
        is_default: Whether default configuration was used
    """
    config: FinderConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    Handles configuration file discovery, loading, validation, saving and
    regeneration of the default configuration.
    """

    DEFAULT_CONFIG_NAMES = [
        'ff-config.yaml',
        'ff-config.yml',
        '.fastfind.yaml',
        '.fastfind.yml',
    ]

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the configuration parser.

        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse configuration from file or use defaults.

        Args:
            config_path: Path to configuration file. If None, searches for default files.

        Returns:
            ConfigParseResult containing parsed configuration and metadata

        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        try:
            if config_path:
                config_path = Path(config_path)
                if not config_path.exists():
                    raise ConfigurationError(f"Configuration file not found: {config_path}")

                config_data = self._load_yaml_file(config_path)
                is_default = False
            else:
                config_path, config_data = self._find_and_load_config()
                is_default = config_data is None

                if is_default:
                    config_data = {}

            # Missing keys fall back to the model defaults
            validated_data = self._validate_config_data(config_data)
            finder_config = FinderConfig.from_dict(validated_data)

            warnings = finder_config.validate_configuration()
            if is_default:
                warnings.append("No configuration file found, using default settings")

            if self.strict_mode and warnings:
                raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

            self.logger.info(f"Configuration loaded successfully from {config_path or 'defaults'}")

            return ConfigParseResult(
                config=finder_config,
                warnings=warnings,
                config_path=config_path,
                is_default=is_default
            )

        except Exception as e:
            if isinstance(e, ConfigurationError):
                raise
            else:
                raise ConfigurationError(f"Failed to load configuration: {e}") from e

    def load_with_safeguard(self, config_path: Union[str, Path]) -> FinderConfig:
        """
        Load configuration, regenerating the defaults when the file is unusable.

        A missing file is created with the defaults. An invalid file is
        overwritten with the defaults. Failing to write the file is only
        logged; the defaults are still returned.

        Args:
            config_path: Path to the configuration file

        Returns:
            The loaded configuration or the defaults
        """
        config_path = Path(config_path)

        if config_path.exists():
            try:
                result = self.load_config(config_path)
                for warning in result.warnings:
                    self.logger.warning(warning)
                return result.config
            except ConfigurationError as e:
                self.logger.warning(f"Invalid config file detected, regenerating default config: {e}")
        else:
            self.logger.info(f"Config file not found, creating default config at {config_path}")

        default_config = FinderConfig()
        try:
            self.save_config(default_config, config_path)
        except ConfigurationError as e:
            self.logger.warning(f"Could not save config: {e}")
        return default_config

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load configuration file from default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        search_paths = [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'fastfind',
        ]

        for search_path in search_paths:
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.exists() and config_file.is_file():
                    try:
                        config_data = self._load_yaml_file(config_file)
                        self.logger.info(f"Found configuration file: {config_file}")
                        return config_file, config_data
                    except Exception as e:
                        self.logger.warning(f"Failed to load {config_file}: {e}")
                        continue

        self.logger.info("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)

            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except (OSError, IOError) as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _validate_config_data(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate configuration data structure and values.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            return validate_config_dict(config_data)
        except ValueError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

    def save_config(self, config: FinderConfig, output_path: Union[str, Path]) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Configuration to save
            output_path: Path where to save the configuration

        Raises:
            ConfigurationError: If file cannot be written
        """
        try:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)

            yaml_content = self._generate_yaml_with_comments(config.to_dict())

            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(yaml_content)

            self.logger.info(f"Configuration saved to {output_path}")

        except (OSError, IOError) as e:
            raise ConfigurationError(f"Cannot write configuration file {output_path}: {e}") from e

    def _generate_yaml_with_comments(self, config_dict: Dict[str, Any]) -> str:
        """
        Generate YAML content with a comment above each section.

        Args:
            config_dict: Configuration dictionary

        Returns:
            YAML content with comments
        """
        lines = [
            "# fastfind configuration",
            "",
        ]

        sections = [
            ("ignore_directories", "Directory name fragments that are never descended into"),
            ("ignore_file_patterns", "File patterns to skip (*.ext suffix or plain substring)"),
            ("max_files_per_search", "Maximum candidates collected by a parallel search"),
            ("max_parallel_threads", "Worker threads for parallel search (null = auto-detect)"),
            ("max_file_size_mb", "Files larger than this are skipped entirely"),
            ("include_hidden", "Visit hidden files and directories"),
            ("follow_symlinks", "Follow symbolic links during traversal"),
            ("content_search_extensions", "Extensions whose content may be searched"),
            ("default_search_options", "Default search options"),
            ("output_options", "Output preferences"),
        ]

        for section_name, comment in sections:
            if section_name in config_dict:
                lines.append(f"# {comment}")
                section_yaml = yaml.dump({section_name: config_dict[section_name]},
                                         default_flow_style=False,
                                         sort_keys=False)
                lines.append(section_yaml.rstrip())
                lines.append("")

        return "\n".join(lines)

    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Validate a configuration file without loading it into a FinderConfig.

        Args:
            config_path: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        try:
            config_path = Path(config_path)

            if not config_path.exists():
                errors.append(f"Configuration file not found: {config_path}")
                return errors

            config_data = self._load_yaml_file(config_path)
            self._validate_config_data(config_data)

        except ConfigurationError as e:
            errors.append(str(e))

        return errors

    def get_config_template(self) -> str:
        """
        Get a template configuration file with all options and comments.

        Returns:
            YAML template as string
        """
        return self._generate_yaml_with_comments(FinderConfig().to_dict())


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser(strict_mode=strict_mode)
    return parser.load_config(config_path)


def load_with_safeguard(config_path: Union[str, Path] = 'ff-config.yaml') -> FinderConfig:
    """
    Convenience function to load configuration, regenerating defaults if needed.

    Args:
        config_path: Path to configuration file

    Returns:
        A valid configuration
    """
    parser = ConfigParser()
    return parser.load_with_safeguard(config_path)


def validate_config_file(config_path: Union[str, Path]) -> List[str]:
    """
    Convenience function to validate a configuration file.

    Returns:
        List of validation errors (empty if valid)
    """
    parser = ConfigParser()
    return parser.validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template configuration file.

    Raises:
        ConfigurationError: If template cannot be created
    """
    parser = ConfigParser()
    template_content = parser.get_config_template()

    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)

    except (OSError, IOError) as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
