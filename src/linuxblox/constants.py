from pathlib import Path

# Top-level key of the Sober config that holds the managed flags object.
# Sober itself reads "fflags", not a plain "flags" key.
# Older builds also wrote "FFlags"; that key is left untouched.
FLAGS_OBJECT_KEY = "fflags"

SOBER_APP_ID = "org.vinegarhq.Sober"

# Relative to $HOME
SOBER_CONFIG_RELATIVE_PATH = Path(".var") / "app" / SOBER_APP_ID / "config" / "sober" / "config.json"

DEFAULT_LAUNCH_COMMAND = ("flatpak", "run", SOBER_APP_ID)

SETTINGS_DIR_NAME = "linuxblox"
SETTINGS_FILE_NAME = "settings.yaml"

JSON_INDENT = 2
