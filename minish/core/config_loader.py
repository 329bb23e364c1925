"""
minish Configuration Loader

- JSON configuration file loading
- Default value handling
- Runtime configuration updates by dot-notation key
- Type-safe access to configuration values

Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from minish.exceptions import BootFailureError, ConfigValidationError


@dataclass
class ShellConfig:
    """Interpreter loop settings."""
    prompt_suffix: str = "$ "
    line_buffer_size: int = 256
    home_directory: str = "/home"
    comment_char: str = "#"


@dataclass
class ProcessConfig:
    """Process management settings."""
    wait_timeout: int = 0  # seconds, 0 waits forever
    exec_failure_status: int = 1


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class Config:
    """
    Main configuration container.
    
    Holds all configuration settings for the interpreter.
    """
    shell: ShellConfig = field(default_factory=ShellConfig)
    process: ProcessConfig = field(default_factory=ProcessConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.
    
    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('config.json')
        >>> print(config.shell.prompt_suffix)
        $ 
    """
    
    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()
    
    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance
    
    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.
        
        Args:
            config_path: Path to the configuration file
        
        Returns:
            Config object with loaded settings
        
        Raises:
            BootFailureError: If the file cannot be loaded or parsed
        """
        path = Path(config_path)
        
        if not path.exists():
            raise BootFailureError(
                f"Configuration file not found: {config_path}",
                subsystem="config"
            )
        
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise BootFailureError(
                f"Invalid JSON in configuration file: {e}",
                subsystem="config"
            )
        except OSError as e:
            raise BootFailureError(
                f"Cannot read configuration file: {e}",
                subsystem="config"
            )
        
        if not isinstance(data, dict):
            raise BootFailureError(
                "Configuration root must be a JSON object",
                subsystem="config"
            )
        
        self._config = self._parse_config(data)
        self._loaded = True
        return self._config
    
    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into Config object."""
        config = Config()
        
        if 'shell' in data:
            shell_data = data['shell']
            config.shell = ShellConfig(
                prompt_suffix=shell_data.get('prompt_suffix', config.shell.prompt_suffix),
                line_buffer_size=shell_data.get('line_buffer_size', config.shell.line_buffer_size),
                home_directory=shell_data.get('home_directory', config.shell.home_directory),
                comment_char=shell_data.get('comment_char', config.shell.comment_char),
            )
        
        if 'process' in data:
            proc_data = data['process']
            config.process = ProcessConfig(
                wait_timeout=proc_data.get('wait_timeout', config.process.wait_timeout),
                exec_failure_status=proc_data.get('exec_failure_status', config.process.exec_failure_status),
            )
        
        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
                use_colors=log_data.get('use_colors', config.logging.use_colors),
            )
        
        self._validate(config)
        return config
    
    @staticmethod
    def _validate(config: Config) -> None:
        if config.shell.line_buffer_size < 2:
            raise ConfigValidationError(
                "Line buffer must hold at least two bytes",
                key="shell.line_buffer_size"
            )
        if len(config.shell.comment_char) != 1:
            raise ConfigValidationError(
                "Comment marker must be a single character",
                key="shell.comment_char"
            )
        if config.process.wait_timeout < 0:
            raise ConfigValidationError(
                "Wait timeout cannot be negative",
                key="process.wait_timeout"
            )
    
    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if not self._loaded:
            return Config()
        return self._config
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.
        
        Args:
            key: Dot-notation key (e.g., 'shell.home_directory')
            default: Default value if key not found
        
        Returns:
            Configuration value or default
        """
        parts = key.split('.')
        obj: Any = self.config
        
        for part in parts:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default
        
        return obj
    
    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.
        
        Args:
            key: Dot-notation key (e.g., 'process.wait_timeout')
            value: Value to set
        
        Note:
            Changes are not persisted to disk.
        """
        if not self._loaded:
            self._config = Config()
            self._loaded = True
        
        parts = key.split('.')
        obj: Any = self._config
        
        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)
        
        final_key = parts[-1]
        if hasattr(obj, final_key):
            setattr(obj, final_key, value)
        else:
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)
    
    def reset(self) -> None:
        """Drop any loaded configuration and return to defaults."""
        self._config = Config()
        self._loaded = False
    
    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            else:
                return obj
        
        return dataclass_to_dict(self.config)


def get_config() -> Config:
    """
    Get the global configuration instance.
    
    Returns:
        Config object with current settings
    """
    loader = ConfigLoader()
    return loader.config
