#!/usr/bin/env python3
"""
Stage Runner for infra-stages

A long integration test is split into named stages (build, deploy,
validate, cleanup, ...). Each stage can be skipped by setting the
environment variable SKIP_<stage name> to a true value, which lets an
operator re-run only the later stages while iterating locally:

    SKIP_build_ami=true SKIP_cleanup_terraform=true pytest tests/test_web_app.py

Stages pass data to each other through StageValues; skipping a stage whose
outputs a later stage needs surfaces as a NotFoundError from the load.
"""

from __future__ import annotations

import os
from typing import Callable, Mapping

from ..config import StageConfig
from ..logsink import LogSink, default_sink

TRUE_VALUES = frozenset({"1", "true", "t", "yes", "y", "on"})


def parse_bool(value: str | None) -> bool:
    """Parse an environment value as a boolean. Unset or unrecognized is False."""
    if value is None:
        return False
    return value.strip().lower() in TRUE_VALUES


class StageRunner:
    """
    Runs or skips named test stages based on environment overrides.

    The runner holds no state between calls: stages may be run in any
    order, any number of times.
    """

    def __init__(
        self,
        logger: LogSink | None = None,
        environ: Mapping[str, str] | None = None,
        config: StageConfig | None = None,
    ):
        """
        Args:
            logger: Sink for skip/execute messages
            environ: Environment to read overrides from. Defaults to
                os.environ, read at call time.
            config: Settings providing the skip variable prefix
        """
        self.logger = logger or default_sink()
        self.config = config or StageConfig()
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def skip_env_var(self, name: str) -> str:
        """Name of the environment variable that skips a stage."""
        return f"{self.config.skip_env_prefix}{name}"

    def should_skip(self, name: str) -> bool:
        return parse_bool(self.environ.get(self.skip_env_var(name)))

    def run_stage(self, name: str, action: Callable[[], object]) -> None:
        """
        Run a stage unless its skip variable is set.

        Args:
            name: Stage name (matched exactly, case-sensitive)
            action: Zero-argument callable doing the stage's work. Any
                exception it raises propagates to the caller.
        """
        env_var = self.skip_env_var(name)

        if self.should_skip(name):
            self.logger.logf(
                "The '%s' environment variable is set, so skipping stage '%s'.", env_var, name
            )
            return

        self.logger.logf(
            "The '%s' environment variable is not set, so executing stage '%s'.", env_var, name
        )
        action()

    def skip_stage_env_var_set(self) -> bool:
        """Check whether any stage has been asked to skip."""
        prefix = self.config.skip_env_prefix
        return any(
            key.startswith(prefix) and parse_bool(value)
            for key, value in self.environ.items()
        )
