import json
import os
from pathlib import Path

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / 'configs' / 'game_balance.json'
CONFIG_FILE_PATH = os.getenv('ANIMAL_DERBY_CONFIG', str(DEFAULT_CONFIG_PATH))

def load_config(path=None):
    """
    Loads the main game balance config file.
    """
    path = path or CONFIG_FILE_PATH
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
        return config
    except FileNotFoundError:
        print(f"FATAL ERROR: Could not find config file at {path}")
        return None
    except Exception as e:
        print(f"FATAL ERROR: Could not parse config file {path}: {e}")
        return None

# Load the config ONCE when the module is first imported
BALANCE_CONFIG = load_config()

def get_config(key_path, default=None):
    """
    Safely gets a value from the loaded config using a 'dot.path'.
    Example: get_config('scoring.correct_points')
    """
    if not BALANCE_CONFIG:
        return default

    try:
        keys = key_path.split('.')
        value = BALANCE_CONFIG
        for key in keys:
            value = value[key]
        return value
    except (KeyError, TypeError):
        print(f"Warning: Could not find config key: {key_path}")
        return default
