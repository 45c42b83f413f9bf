"""plugin-scaffolder -- interactive generator for host rule and parser packages.

Quick usage::

    import asyncio

    from plugin_scaffolder import ScaffoldConfig, ScaffoldGenerator

    generator = ScaffoldGenerator(ScaffoldConfig())
    created = asyncio.run(generator.new_rule())
"""

from plugin_scaffolder.config import HostManifest, ScaffoldConfig
from plugin_scaffolder.generator import GenerationState, ScaffoldGenerator
from plugin_scaffolder.init_wizard import InitWizard

__all__ = [
    "GenerationState",
    "HostManifest",
    "InitWizard",
    "ScaffoldConfig",
    "ScaffoldGenerator",
]

__version__ = "0.1.0"
