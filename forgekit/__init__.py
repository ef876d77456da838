"""
EntropyForge Shared Kit
=======================

Configuration, logging, console and numerical utilities shared by the
EntropyForge generator, analyzer and command-line driver.
"""

from forgekit.config import ForgeConfig, get_config

__all__ = ["ForgeConfig", "get_config"]
