"""
EntropyForge Configuration Management
======================================

Centralized configuration for the generator, analyzer and self-test
routines using Python dataclasses and TOML-based persistence.

A configuration file looks like::

    [global]
    log_level = "DEBUG"

    [generator]
    word_count = 7
    separator = " "
    capitalize = true

    [uniformity]
    runs = 20000

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

if TYPE_CHECKING:
    from entropyforge.core.models import DicewareOptions


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "entropyforge.toml"


# ========================== Section Configs ================================


@dataclass(frozen=False, slots=True)
class GeneratorConfig:
    """Defaults for CSPRNG strings and Diceware passphrases.

    ``number_bound`` is the exclusive upper bound of the integer appended
    when ``add_numbers`` is set.
    """

    csprng_length: int = 32
    word_count: int = 6
    separator: str = "-"
    capitalize: bool = False
    uppercase: bool = False
    add_numbers: bool = False
    add_symbols: bool = False
    number_bound: int = 696_969
    pool_size: int = 16

    def diceware_options(self) -> DicewareOptions:
        """Build :class:`DicewareOptions` from this section."""
        from entropyforge.core.models import DicewareOptions

        return DicewareOptions(
            word_count=self.word_count,
            separator=self.separator,
            capitalize=self.capitalize,
            uppercase=self.uppercase,
            add_numbers=self.add_numbers,
            add_symbols=self.add_symbols,
            number_bound=self.number_bound,
        )


@dataclass(frozen=False, slots=True)
class UniformityConfig:
    """Parameters of the chi-squared generator self-test.

    Reference:
        Pearson, K. (1900). On the criterion that a given system of
        deviations from the probable. Philosophical Magazine, 50(302).
    """

    runs: int = 10_000
    alpha: float = 0.01


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Logging verbosity and general operational parameters."""

    log_level: str = "INFO"
    log_file: str | None = None
    log_json: bool = False
    console_logging: bool = True
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class ForgeConfig:
    """Master configuration aggregating all sections.

    Usage:
        >>> config = ForgeConfig.load()                  # from default path
        >>> config = ForgeConfig.load("custom.toml")     # from custom path
        >>> print(config.generator.word_count)
        6
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    uniformity: UniformityConfig = field(default_factory=UniformityConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> ForgeConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``entropyforge.toml`` in
        the project root.  Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`ForgeConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            generator=cls._build_section(GeneratorConfig, raw.get("generator", {})),
            uniformity=cls._build_section(UniformityConfig, raw.get("uniformity", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are ignored so that newer config
        files do not break older code.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


# ========================= Module-level convenience ========================

def get_config(path: str | Path | None = None) -> ForgeConfig:
    """Module-level convenience wrapper around :meth:`ForgeConfig.load`.

    Caches the result so that repeated calls share one instance.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = ForgeConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
