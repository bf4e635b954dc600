"""jr-scripts: bootstrap web application skeletons by chaining external tools.

Quick usage::

    from jr_scripts.commands.mknext import build_context, build_steps
    from jr_scripts.config import Config
    from jr_scripts.environment import Environment
    from jr_scripts.pipeline import Pipeline

    env = Environment.from_os()
    config = Config.from_env("my-app", env)
    outcome = await Pipeline(build_steps(config, env), build_context(config, env)).run()
"""

__version__ = "1.0.0"
