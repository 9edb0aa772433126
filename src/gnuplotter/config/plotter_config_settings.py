# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from typing import cast

from gnuplotter.config.config_manager import ConfigManager
from gnuplotter.lib.styles import DEFAULT_STYLE, PlotStyle
from gnuplotter.lib.types import FileNameStr


class PlotterConfigSettings:
    """Typed accessors over the JSON configuration, with defaults for missing values."""
    _cfg: ConfigManager | None = None
    _logger     = logging.getLogger("PlotterConfigSettings")

    _DEFAULT_EXECUTABLE: str        = "gnuplot"
    _DEFAULT_PERSIST: bool          = False
    _DEFAULT_DEBUG: bool            = False
    _DEFAULT_TMP_PREFIX: str        = "py-gnuplot-"
    _DEFAULT_LOG_LEVEL: str         = "INFO"
    _DEFAULT_LOG_DIR: str           = "logs"
    _DEFAULT_LOG_FILENAME: str      = "gnuplotter.log"

    @classmethod
    def _config(cls) -> ConfigManager:
        if cls._cfg is None:
            cls._cfg = ConfigManager()
        return cls._cfg

    @classmethod
    def use(cls, cfg: ConfigManager) -> None:
        """Replace the backing configuration, e.g. with one loaded from an explicit path."""
        cls._cfg = cfg

    @classmethod
    def _config_path(cls, *path: str) -> str:
        """Return dotted path for logging."""
        return ".".join(path)

    @classmethod
    def _get_str(cls, default: str, *path: str) -> str:
        value = cls._config().get(*path)
        if value is None:
            cls._logger.warning(
                "Missing configuration value for '%s'; using default '%s'",
                cls._config_path(*path),
                default,
            )
            return default
        if not isinstance(value, str):
            coerced = str(value)
            cls._logger.warning(
                "Non-string configuration value for '%s': %r; using coerced '%s'",
                cls._config_path(*path),
                value,
                coerced,
            )
            return coerced
        if value == "":
            cls._logger.warning(
                "Empty configuration value for '%s'; using default '%s'",
                cls._config_path(*path),
                default,
            )
            return default
        return value

    @classmethod
    def _get_bool(cls, default: bool, *path: str) -> bool:
        value = cls._config().get(*path)
        if isinstance(value, bool):
            return value
        if value is None:
            cls._logger.warning(
                "Missing configuration value for '%s'; using default %s",
                cls._config_path(*path),
                default,
            )
            return default

        text = str(value).strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off"):
            return False

        cls._logger.warning(
            "Invalid boolean configuration value for '%s': %r; using default %s",
            cls._config_path(*path),
            value,
            default,
        )
        return default

    @classmethod
    def get_config_path(cls) -> str:
        return cls._config().get_config_path()

    @classmethod
    def executable(cls) -> str:
        return cls._get_str(cls._DEFAULT_EXECUTABLE, "Gnuplot", "executable")

    @classmethod
    def persist(cls) -> bool:
        return cls._get_bool(cls._DEFAULT_PERSIST, "Gnuplot", "persist")

    @classmethod
    def debug(cls) -> bool:
        return cls._get_bool(cls._DEFAULT_DEBUG, "Gnuplot", "debug")

    @classmethod
    def tmp_prefix(cls) -> str:
        return cls._get_str(cls._DEFAULT_TMP_PREFIX, "Gnuplot", "tmp_prefix")

    @classmethod
    def default_style(cls) -> PlotStyle:
        value = cls._get_str(DEFAULT_STYLE.value, "Gnuplot", "default_style")
        style = PlotStyle.parse(value)
        if style is None:
            cls._logger.warning(
                "Invalid style for 'Gnuplot.default_style': %r; using default '%s'",
                value,
                DEFAULT_STYLE.value,
            )
            return DEFAULT_STYLE
        return style

    @classmethod
    def log_level(cls) -> str:
        return cls._get_str(cls._DEFAULT_LOG_LEVEL, "logging", "log_level")

    @classmethod
    def log_dir(cls) -> str:
        return cls._get_str(cls._DEFAULT_LOG_DIR, "logging", "log_dir")

    @classmethod
    def log_filename(cls) -> FileNameStr:
        return cast(FileNameStr, cls._get_str(cls._DEFAULT_LOG_FILENAME, "logging", "log_filename"))

    @classmethod
    def reload(cls) -> None:
        """
        Reload the configuration settings.
        """
        cls._config().reload()
