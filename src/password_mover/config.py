"""
Config store for the source and destination paths.

This module is responsible for:
- Loading the two-key path configuration from a text file
- Saving a configuration as Key="value" lines
- Prompting for the paths when no usable config file exists

File format (order of lines does not matter):

    Path="<source>"
    DestPath="<destination>"
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from .types import Configuration

logger = logging.getLogger(__name__)

# Default config file name, resolved against the working directory
DEFAULT_CONFIG_FILE = "path.conf"

SOURCE_KEY = "Path="
DEST_KEY = "DestPath="


class ConfigError(Exception):
    """Raised when a configuration file cannot be written."""
    pass


def _strip_quotes(value: str) -> str:
    """Remove one layer of surrounding double quotes."""
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_config(text: str) -> Optional[Configuration]:
    """
    Parse config file contents.

    Args:
        text: Full contents of a config file

    Returns:
        Configuration if both keys are present with non-empty values,
        None otherwise
    """
    source = None
    dest = None

    for line in text.splitlines():
        if line.startswith(SOURCE_KEY):
            source = _strip_quotes(line[len(SOURCE_KEY):])
        elif line.startswith(DEST_KEY):
            dest = _strip_quotes(line[len(DEST_KEY):])

    if not source or not dest:
        return None

    return Configuration(source_path=Path(source), dest_path=Path(dest))


def load_config(config_file: Union[str, Path]) -> Optional[Configuration]:
    """
    Load the path configuration from a file.

    Never raises for a missing file. An unreadable or malformed file is
    treated the same as a missing one so the caller can re-create it.

    Args:
        config_file: Path to the config file

    Returns:
        Configuration, or None if the file is absent or does not parse
    """
    config_path = Path(config_file)

    if not config_path.is_file():
        logger.debug(f"Config file not found: {config_path}")
        return None

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read config file {config_path}: {e}")
        return None

    config = parse_config(text)
    if config is None:
        logger.info(f"Config file is missing Path or DestPath: {config_path}")
    return config


def save_config(config_file: Union[str, Path], config: Configuration) -> None:
    """
    Write the configuration, overwriting any existing file.

    Args:
        config_file: Path to the config file
        config: Configuration to persist

    Raises:
        ConfigError: If the file cannot be created or written
    """
    config_path = Path(config_file)
    contents = (
        f'{SOURCE_KEY}"{config.source_path}"\n'
        f'{DEST_KEY}"{config.dest_path}"\n'
    )

    try:
        config_path.write_text(contents, encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot create config file {config_path}: {e}") from e

    logger.info(f"Saved config file: {config_path}")


def _ask_path(input_func: Callable[[str], str], prompt: str) -> str:
    """Repeat a prompt until the answer is not blank."""
    while True:
        answer = input_func(prompt).strip()
        if answer:
            return answer
        print("A path is required.")


def prompt_for_config(input_func: Optional[Callable[[str], str]] = None) -> Configuration:
    """Ask the operator for the source and destination paths; blank answers are asked again."""
    if input_func is None:
        input_func = input
    source = _ask_path(input_func, "Enter the path: ")
    dest = _ask_path(input_func, "Enter the destination folder path: ")
    return Configuration(source_path=Path(source), dest_path=Path(dest))


def obtain_config(
    config_file: Union[str, Path],
    input_func: Optional[Callable[[str], str]] = None
) -> Tuple[Configuration, bool]:
    """
    Load the configuration, creating it interactively if needed.

    Args:
        config_file: Path to the config file
        input_func: Callable used to read each answer (default: input)

    Returns:
        Tuple of (configuration, freshly_entered)

    Raises:
        ConfigError: If a freshly entered configuration cannot be saved
    """
    config = load_config(config_file)
    if config is not None:
        return config, False

    print("Config file not found or invalid. Creating a new config file.")
    config = prompt_for_config(input_func)
    save_config(config_file, config)
    return config, True
