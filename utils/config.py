import yaml


class ConfigError(Exception):
    """Raised when the YAML configuration can't be read or parsed."""


def load_config(config_file: str):
    """
    Load configuration settings from a YAML file.

    This function reads and parses a YAML file to load configuration data into a
    Python dictionary. An empty file yields an empty dictionary.

    Args:
        config_file (str): The file path to the YAML configuration file.

    Returns:
        dict: A dictionary containing the parsed configuration data.

    Raises:
        ConfigError: If the file is missing, isn't valid YAML, or isn't a mapping.

    Example Usage:
        config = load_config("config/config.yaml")
        print(config["script"]["max_dimen"])
    """
    try:
        with open(config_file, encoding="utf-8") as file:
            config = yaml.safe_load(file)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file {config_file} not found.")
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML file: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Configuration file {config_file} must contain a mapping at the top level.")
    return config
