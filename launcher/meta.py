from __future__ import annotations

APP_ID = "dlauncher"
PROG = "launcher"
PURPOSE = "Expand a named shortcut template and run it with a named executable"

CONFIG_ENV_VAR = "DLAUNCHER_CONFIG_PATH"
CONFIG_FILENAME = "config.yaml"
