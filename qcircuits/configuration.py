# Copyright 2019-2020 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
r"""
This module contains functions used to load, store, save, and modify
configuration options for QCircuits.

The options control the decomposition engine (maximum rewrite depth and default
compiler), the numerical tolerance used when reconstructing gate parameters from
matrices, and logging.
"""
import collections.abc
import os

import toml
from appdirs import user_config_dir


DEFAULT_CONFIG_SPEC = {
    "decomposition": {
        "max_depth": (int, 200),
        "compiler": (str, "elementary"),
    },
    "numerics": {"atol": (float, 1e-8)},
    "logging": {"level": (str, "info"), "logfile": ((str, type(None)), None)},
}
"""dict: Nested dictionary representing the allowed configuration
sections, options, default values, and allowed types for QCircuits
configurations. For each configuration option key, the
corresponding value is a length-2 tuple, containing:

* A type or tuple of types, representing the allowed type
  for that configuration option.

* The default value for that configuration option.

.. note::

    By TOML convention, keys with a default value of ``None``
    will **not** be present in the generated/loaded configuration
    file. This is because TOML has no concept of ``NoneType`` or ``Null``,
    instead, the non-presence of a key indicates that the configuration
    value is not set.
"""


class ConfigurationError(Exception):
    """Exception used for configuration errors"""


def _deep_update(source, overrides):
    """Recursively update a nested dictionary.

    This function is a generalization of Python's built in
    ``dict.update`` method, modified to recursively update
    keys with nested dictionaries.
    """
    for key, value in overrides.items():
        if isinstance(value, collections.abc.Mapping) and value:
            returned = _deep_update(source.get(key, {}), value)
            source[key] = returned
        elif value != {}:
            source[key] = overrides[key]
    return source


def _generate_config(config_spec, **kwargs):
    """Generates a configuration, given a QCircuits configuration
    specification.

    See :attr:`~.DEFAULT_CONFIG_SPEC` for an example of a valid configuration
    specification.

    Optional keyword arguments may be provided to override default values
    in the configuration specification. If the provided override values
    do not match the expected type defined in the configuration spec,
    a ``ConfigurationError`` is raised.

    **Example**

    >>> _generate_config(DEFAULT_CONFIG_SPEC, decomposition={"max_depth": 50})
    {
        "decomposition": {"max_depth": 50, "compiler": "elementary"},
        "numerics": {"atol": 1e-08},
        "logging": {"level": "info"},
    }

    Args:
        config_spec (dict): nested dictionary representing the
            configuration specification

    Keyword Args:
        Provided keyword arguments may overwrite default values of
        matching keys.

    Returns:
        dict: the default configuration defined by the input config spec

    Raises:
        ConfigurationError: if provided keyword argument overrides do not
        match the expected type defined in the configuration spec.
    """
    res = {}
    for k, v in config_spec.items():
        if isinstance(v, tuple):
            # config spec value v represents the allowed type and default value

            if k in kwargs:
                if not isinstance(kwargs[k], v[0]):
                    raise ConfigurationError(
                        "Expected type {} for option {}, received {}".format(
                            v[0], k, type(kwargs[k])
                        )
                    )

                if kwargs[k] is not None:
                    res[k] = kwargs[k]
            else:
                if v[1] is not None:
                    res[k] = v[1]

        elif isinstance(v, dict):
            # config spec value is a dictionary of more options
            res[k] = _generate_config(v, **kwargs.get(k, {}))
    return res


def load_config(filename="config.toml", log=True, **kwargs):
    """Load configuration from keyword arguments, configuration file or
    environment variables.

    .. note::

        The configuration dictionary will be created based on the following
        (order defines the importance, going from most important to least
        important):

        1. keyword arguments passed to ``load_config``
        2. data contained in environmental variables (if any)
        3. data contained in a configuration file (if exists)

    Args:
        filename (str): the name of the configuration file to look for
        log (bool): whether or not to log details

    Keyword Args:
        Sections of configuration options, e.g. ``decomposition={"max_depth": 50}``

    Returns:
        dict[str, dict[str, Union[str, int, float]]]: the configuration
    """
    filepath = find_config_file(filename=filename)

    if log:
        from qcircuits.logger import create_logger  # pylint: disable=import-outside-toplevel

        logger = create_logger(__name__)

    if filepath is not None:
        with open(filepath, "r") as f:
            config = toml.load(f)

        if log:
            logger.debug("Configuration file %s loaded", filepath)

        unknown = set(config) - set(DEFAULT_CONFIG_SPEC)
        if unknown and log:
            logger.warning(
                "The configuration from the %s file contains unknown sections: %s",
                filepath,
                ", ".join(sorted(unknown)),
            )

    else:
        config = {}

        if log:
            logger.debug("No QCircuits configuration file found.")

    # update the configuration from environment variables
    update_from_environment_variables(config)

    # update the configuration from keyword arguments
    for config_section, section_options in kwargs.items():
        _deep_update(config, {config_section: section_options})

    # generate the configuration object by using the defined
    # configuration specification at the top of the file
    config = _generate_config(DEFAULT_CONFIG_SPEC, **config)

    if log:
        logger.debug("Loaded configuration: %s", config)

    return config


def delete_config(filename="config.toml", directory=None):
    """Delete a configuration file.

    If called with no arguments, the currently active configuration file is deleted.

    Keyword Args:
        filename (str): the filename of the configuration file to delete
        directory (str): the directory of the configuration file to delete
            If ``None``, the currently active configuration file is deleted.
    """
    if directory is None:
        file_path = find_config_file(filename)
    else:
        file_path = os.path.join(directory, filename)

    os.remove(file_path)


def reset_config(filename="config.toml"):
    """Delete all active configuration files

    .. warning::
        This will delete all configuration files with the specified filename
        (default ``config.toml``) found in the configuration directories.

    Keyword Args:
        filename (str): the filename of the configuration files to reset
    """
    for config in get_available_config_paths(filename):
        delete_config(os.path.basename(config), os.path.dirname(config))


def find_config_file(filename="config.toml"):
    """Get the filepath of the first configuration file found from the defined
    configuration directories (if any).

    .. note::

        The following directories are checked (in the following order):

        * The current working directory
        * The directory specified by the environment variable ``QCIRCUITS_CONF`` (if specified)
        * The user configuration directory (if specified)

    Keyword Args:
        filename (str): the configuration file to look for

    Returns:
         Union[str, None]: the filepath to the configuration file or None, if
             no file was found
    """
    directories = get_available_config_paths(filename=filename)

    if directories:
        return directories[0]

    return None


def directories_to_check():
    """Returns the list of directories that should be checked for a configuration file.

    Returns:
        list: the list of directories to check
    """
    directories = [os.getcwd()]

    env_config_dir = os.environ.get("QCIRCUITS_CONF", "")
    if env_config_dir:
        directories.append(env_config_dir)

    directories.append(user_config_dir("qcircuits", "Xanadu"))
    return directories


def update_from_environment_variables(config):
    """Updates the current configuration object from data stored in environment
    variables.

    Every option of :attr:`~.DEFAULT_CONFIG_SPEC` can be overridden with an
    environment variable named ``QCIRCUITS_<SECTION>_<OPTION>``, e.g.
    ``QCIRCUITS_DECOMPOSITION_MAX_DEPTH``.

    Args:
        config (dict[str, dict[str, Union[str, int, float]]]): the
            configuration to be updated
    """
    for section, sectionconfig in DEFAULT_CONFIG_SPEC.items():
        env_prefix = "QCIRCUITS_{}_".format(section.upper())
        for key in sectionconfig:
            env = env_prefix + key.upper()
            if env in os.environ:
                config.setdefault(section, {})
                config[section][key] = _parse_environment_variable(section, key, os.environ[env])


def _parse_environment_variable(section, key, value):
    """Parse a value stored in an environment variable.

    Args:
        section (str): configuration section name
        key (str): the name of the option
        value (str): the value obtained from the environment variable

    Returns:
        [str, bool, int, float]: the parsed value
    """
    trues = ("true", "True", "TRUE", "1")
    falses = ("false", "False", "FALSE", "0")
    option_type = DEFAULT_CONFIG_SPEC[section][key][0]

    if option_type is bool:
        if value in trues:
            return True

        if value in falses:
            return False

        raise ValueError("Boolean could not be parsed")

    if option_type is int:
        return int(value)

    if option_type is float:
        return float(value)

    return value


def active_configs(filename="config.toml"):
    """Prints the filepaths for existing configuration files to the standard
    output and marks the one that is active.

    This function relies on the precedence ordering of directories to check
    when marking the active configuration.

    Args:
        filename (str): the name of the configuration files to look for
    """
    active_configs_list = get_available_config_paths(filename)

    if active_configs_list:
        print(
            "\nThe following QCircuits configuration files were found "
            'with the name "{}":\n'.format(filename)
        )

        for i, config in enumerate(active_configs_list):
            print("* " + config + (" (active)" if i == 0 else ""))
    else:
        print("\nNo QCircuits configuration files were found with the " 'name "{}".\n'.format(filename))

    print("\nThe following directories were checked:\n")
    for directory in directories_to_check():
        print("* " + directory)


def get_available_config_paths(filename="config.toml"):
    """Get the paths for the configuration files available to QCircuits.

    Args:
        filename (str): the name of the configuration files to look for

    Returns:
        list[str]: the filepaths for the active configurations
    """
    active_configs_list = []

    for directory in directories_to_check():
        filepath = os.path.join(directory, filename)
        if os.path.exists(filepath):
            active_configs_list.append(filepath)

    return active_configs_list


def store_config(filename="config.toml", location="user_config", **kwargs):
    r"""Save configuration options to a TOML file.

    The configuration file can be created in the following locations:

    - A global user configuration directory (``"user_config"``)
    - The current working directory (``"local"``)

    A file in the current working directory takes precedence over the
    global one when the configuration is loaded.

    **Example:**

    >>> store_config(location="local", decomposition={"max_depth": 50})

    This creates the following ``"config.toml"`` file in the **current working directory**:

    .. code-block:: toml

        [decomposition]
        max_depth = 50
        compiler = "elementary"

        [numerics]
        atol = 1e-08

        [logging]
        level = "info"

    Keyword Args:
        filename (str): the name of the configuration file
        location (str): determines where the configuration file should be saved

    Additional configuration sections are passed as keyword arguments.
    """
    if location == "user_config":
        directory = user_config_dir("qcircuits", "Xanadu")
        os.makedirs(directory, exist_ok=True)
    elif location == "local":
        directory = os.getcwd()
    else:
        raise ConfigurationError("This location is not recognized.")

    filepath = os.path.join(directory, filename)

    config = {}

    # load the existing config if it already exists
    if os.path.isfile(filepath):
        with open(filepath, "r") as f:
            config = toml.load(f)

    _deep_update(config, kwargs)
    config = _generate_config(DEFAULT_CONFIG_SPEC, **config)

    with open(filepath, "w") as f:
        toml.dump(config, f)


DEFAULT_CONFIG = _generate_config(DEFAULT_CONFIG_SPEC)
SESSION_CONFIG = load_config(log=False)
