import json
import logging
import os
import sys
from enum import Enum

from pydantic import Field

import evpromise.utils
from .config import BaseSettings, config_default

logger = logging.getLogger("evpromise.settings")
_default_home = evpromise.utils.get_home()


class AsyncEnum(str, Enum):
    nest = 'nest'
    awaitio = 'awaitio'


class Logging(BaseSettings):
    """Where evpromise logs to, and how much.

Unhandled rejections are always logged at the error level on `evpromise.promise`. The other levels take a comma
separated list of logger names, see `evpromise.logging` for what each logger reports. Libraries or services that
configure logging themselves can set EVPROMISE_LOGGING_SETUP=false, so no handler is added.

The values are read when evpromise is imported. Changing them later only has effect after
`evpromise.logging.reset()` and `evpromise.logging.setup()`.
    """
    setup: bool = Field(True, title='Add a handler to the evpromise logger when evpromise is imported.')
    rich: bool = Field(True, title='Let the handler be a rich.logging.RichHandler, else a plain StreamHandler.')
    debug: str = Field('', title="Loggers to log at the debug level, e.g. 'evpromise.gate,evpromise.future' (any other value, like '1', means all of evpromise)")
    info: str = Field('', title="Loggers to log at the info level, same format as debug")
    warning: str = Field('evpromise', title="Loggers to log at the warning level, same format as debug")
    error: str = Field('', title="Loggers to log at the error level only, same format as debug")

    model_config = config_default('evpromise_logging_')


class Promise(BaseSettings):
    """How promise chains report failures nobody catches"""
    report_unhandled: bool = Field(True, title="Print the tracebacks of rejections without a catch handler when the process exits")

    model_config = config_default('evpromise_promise_')


class Settings(BaseSettings):
    """General settings for evpromise"""
    async_method: AsyncEnum = Field(AsyncEnum.awaitio, title="How a reactor runs its event loop, 'awaitio' (plain asyncio) or 'nest' (re-entrant, using nest_asyncio)")
    home: str = Field(_default_home, title="Home directory for evpromise, which defaults to `$HOME/.evpromise`. "
                      "If both `$EVPROMISE_HOME` and `$HOME` are not defined, the current working directory is used.")

    logging: Logging = Field(default_factory=Logging, title="Logging configuration")
    promise: Promise = Field(default_factory=Promise, title="Promise chain configuration")

    model_config = config_default('evpromise_', use_enum_values=True)


_default_values = {}
filename = os.path.join(_default_home, "main.yml")
if os.path.exists(filename):
    with open(filename) as f:
        _default_values = evpromise.utils.yaml_load(f)
    if _default_values is None:
        _default_values = {}
    logger.debug("loaded settings from %s", filename)


main = Settings(**_default_values)


def save(exclude_defaults=True, verbose=False):
    filename = os.path.join(evpromise.utils.get_private_dir(), "main.yml")
    if verbose:
        values = main.model_dump(mode='json')
        print("All values:\n")
        evpromise.utils.yaml_dump(sys.stdout, values)

    with open(filename, "w") as f:
        values = main.model_dump(mode='json', exclude_defaults=exclude_defaults)
        evpromise.utils.yaml_dump(f, values)
        if verbose:
            print("Saved values:\n")
            evpromise.utils.yaml_dump(sys.stdout, values)


def _main(args):
    if len(args) > 1:
        type = args[1]
        if type == "schema":
            print(json.dumps(main.model_json_schema(), indent=2))
        elif type == "yaml":
            values = main.model_dump(mode='json')
            evpromise.utils.yaml_dump(sys.stdout, values)
        elif type == "yaml-diff":
            values = main.model_dump(mode='json', exclude_defaults=True)
            evpromise.utils.yaml_dump(sys.stdout, values)
        elif type == "json":
            values = main.model_dump(mode='json')
            json.dump(values, sys.stdout, indent=2)
        elif type == "save":
            save(exclude_defaults=True, verbose=True)
        elif type == "save-defaults":
            save(exclude_defaults=False, verbose=True)
        else:
            raise ValueError('only support schema, yaml, yaml-diff, json, save or save-defaults')
    else:
        print(json.dumps(main.model_dump(mode='json'), indent=2))


if __name__ == "__main__":
    _main(sys.argv)
