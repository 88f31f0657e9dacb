import os

import yaml


def get_home():
    '''Get evpromise home directory, defaults to $HOME/.evpromise.

    The $EVPROMISE_HOME environment variable can be set to override this default.

    If both $EVPROMISE_HOME and $HOME are not defined, the current working directory is used.
    '''
    if 'EVPROMISE_HOME' in os.environ:
        return os.environ['EVPROMISE_HOME']
    elif 'HOME' in os.environ:
        return os.path.join(os.environ['HOME'], ".evpromise")
    else:
        return os.getcwd()


def get_private_dir(subdir=None, *extra):
    path = get_home()
    if subdir:
        path = os.path.join(path, subdir, *extra)
    os.makedirs(path, exist_ok=True)
    return path


def yaml_dump(f, data):
    yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)


def yaml_load(f):
    return yaml.safe_load(f)
