"""
sunmoon/core/config.py
======================
Global configuration for SunMoon-Core.
All tunables in one place. Config objects are plain values: the engine
reads them, never mutates them.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass
class EngineConfig:
    disabled_rules:       List[str] = field(default_factory=list)   # rule names, order is fixed
    iteration_cap_factor: int       = 2      # fixpoint cap = factor × N²
    log_steps:            bool      = True   # debug-log every rule firing


@dataclass
class ValidationConfig:
    require_nonempty_start: bool = True   # "Grid cannot be completely empty"
    min_size:               int  = 4


@dataclass
class ServerConfig:
    host:         str       = "0.0.0.0"
    port:         int       = 8000
    api_prefix:   str       = "/api/v1"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class SunMoonConfig:
    mode:       str              = "solve"     # "solve" | "explain"
    engine:     EngineConfig     = field(default_factory=EngineConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    server:     ServerConfig     = field(default_factory=ServerConfig)

    @classmethod
    def for_mode(cls, mode: str) -> "SunMoonConfig":
        """Pre-tuned configs per interaction mode."""
        if mode not in ("solve", "explain"):
            raise ValueError(f"Unknown mode '{mode}'. Expected 'solve' or 'explain'.")
        cfg = cls(mode=mode)
        if mode == "solve":
            cfg.engine.log_steps = False    # a full run can emit 2N² firings
        return cfg


# Default config, never mutated by the library
DEFAULT_CONFIG = SunMoonConfig()
