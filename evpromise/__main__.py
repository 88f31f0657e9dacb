import os
import sys

usage = """usage: evpromise [-h] {settings}

optional arguments:
  -h, --help            show this help message and exit

positional arguments:
    settings            view and save settings (json, yaml, yaml-diff, schema, save, save-defaults)

Examples:
$ evpromise settings yaml
$ EVPROMISE_ASYNC_METHOD=nest evpromise settings save
"""


def main(args=None):
    if args is None:
        args = sys.argv
    if len(args) > 1 and args[1] == "settings":
        import evpromise.settings
        evpromise.settings._main([os.path.basename(args[0]) + " " + args[1]] + args[2:])
    else:
        print(usage)
        sys.exit(0)


if __name__ == "__main__":
    main()
