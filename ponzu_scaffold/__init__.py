"""ponzu-scaffold -- bootstrap and build Ponzu CMS projects.

Quick usage::

    from ponzu_scaffold import BuildOptions, Config, bootstrap, build_and_compile

    config = Config(workspace_root="/home/me/go")
    project = await bootstrap("github.com/me/site", BuildOptions(), config, answer="y")
    await build_and_compile(project, config)
"""

from ponzu_scaffold.config import BuildOptions, Config, RepoIdentity, ToolchainConfig
from ponzu_scaffold.pipeline import bootstrap, build_and_compile

__all__ = [
    "BuildOptions",
    "Config",
    "RepoIdentity",
    "ToolchainConfig",
    "bootstrap",
    "build_and_compile",
]
