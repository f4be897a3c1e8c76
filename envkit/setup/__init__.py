"""
Provisioning pipelines for EnvKit.

This package contains the step/pipeline machinery and the built-in
profiles (``zsh`` and ``nvim``).
"""

from envkit.setup.pipeline import Pipeline, RunContext, Step

__all__ = ["Pipeline", "RunContext", "Step"]
