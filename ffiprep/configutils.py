import sys
import os
import appdirs

from configargparse import DefaultConfigFileParser as CfgFileParser

import ffiprep.git_utils
import ffiprep.utils

CONFIG_FILENAME = "ffiprep.conf"


def extract_value_from_argv(key, argv=None, default=None, verbose=0):
    """ Extract the value for the given key from the argv.
        Return the given default if no key was identified
    """
    if argv is None:
        argv = sys.argv

    value = default

    hyphens = ("-", "--")
    for hh in hyphens:
        for arg in argv:
            try:
                keywithhyphens = "".join([hh, key, "="])
                if arg.startswith(keywithhyphens):
                    value = arg.split("=", 1)[1]
                elif arg == "".join([hh, key]):
                    index = argv.index(arg)
                    value = argv[index + 1]
            except (ValueError, IndexError):
                pass

    if verbose >= 4:
        msg = "argv extraction: " + key + " "
        if value:
            msg += str(value)
        print(msg)
    return value


def default_config_directories(user_config_dir=None, system_config_dir=None, verbose=0):
    """ The directories that may hold an ffiprep.conf, highest priority first """
    # Use configuration in the order (lowest to highest priority)
    # 1) system config (XDG compliant.  /etc/xdg/ffiprep)
    # 2) user config   (XDG compliant. ~/.config/ffiprep)
    # 3) gitroot
    # 4) current working directory
    # 5) environment variables
    # 6) given on the command line

    # These variables are settable to assist writing tests
    if user_config_dir is None:
        user_config_dir = appdirs.user_config_dir(appname="ffiprep")
    if system_config_dir is None:
        system_config_dir = appdirs.site_config_dir(appname="ffiprep")

    results = ffiprep.utils.ordered_unique(
        [
            os.getcwd(),
            ffiprep.git_utils.find_git_root(),
            user_config_dir,
            system_config_dir,
        ]
    )
    if verbose >= 9:
        print(" ".join(["Default config directories"] + results))
    return results


def defaultconfigs(user_config_dir=None, system_config_dir=None, verbose=0):
    """ Find the ffiprep.conf files, lowest priority first """
    confs = [
        os.path.join(defaultdir, CONFIG_FILENAME)
        for defaultdir in reversed(
            default_config_directories(
                user_config_dir=user_config_dir,
                system_config_dir=system_config_dir,
                verbose=verbose,
            )
        )
    ]

    # Only return the configs that exist
    configs = [cfg for cfg in confs if os.path.isfile(cfg)]
    if verbose >= 8:
        print(" ".join(["Default configs are "] + configs))
    return configs


def extract_item_from_conf(key, user_config_dir=None, system_config_dir=None, default=None, verbose=0):
    """ Extract the value for the given key from the ffiprep.conf files.
        Return the given default if no key was identified
    """
    fileparser = CfgFileParser()
    for cfgpath in reversed(
        defaultconfigs(user_config_dir=user_config_dir, system_config_dir=system_config_dir)
    ):
        with open(cfgpath) as cfg:
            items = fileparser.parse(cfg)
            try:
                value = items[key]
                if verbose >= 2:
                    print(" ".join([cfgpath, "contains", key, "=", str(value)]))
                return value
            except KeyError:
                continue

    return default
