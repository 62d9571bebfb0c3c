#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""todolist
Version:  0.0.2
Author:   The todolist authors
License:  MIT
About:
A terminal-based todo list with a single local YAML file for storage.

usage: todolist [-h] [-c <file>] [-f <file>] for more help: todolist <command> -h ...

A todo list for nerds.

commands:
  (for more help: todolist <command> -h)
    create (c)          create a new task
    list (l, ls)        list tasks
    get (g)             show a task
    update (u)          update a task ('@@' is replaced by the old text)
    delete (d, rm)      delete a task
    help (h)            show this help message
    version             show version info

optional arguments:
  -h, --help            show this help message and exit
  -c <file>, --config <file>
                        config file
  -f <file>, --file <file>
                        task list file


Copyright © 2021 The todolist authors

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

"""
import argparse
import configparser
import json
import os
import re
import sys

import yaml
from rich import box
from rich.color import ColorParseError
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.style import Style

APP_NAME = "todolist"
APP_VERS = "0.0.2"
APP_COPYRIGHT = "Copyright © 2021 The todolist authors."
APP_LICENSE = "Released under MIT license."
BACKREF = "@@"
DEFAULT_OUTPUT = "table"
OUTPUT_FORMATS = ['plain', 'table', 'json', 'yaml', 'yml']
DEFAULT_DATA_FILE = "$HOME/.todo.yaml"
DEFAULT_CONFIG_FILE = f"$HOME/.config/{APP_NAME}/config"
DEFAULT_CONFIG = (
    "[main]\n"
    f"data_file = {DEFAULT_DATA_FILE}\n"
    "# output format for 'list' and for the list printed after changes\n"
    "# (plain, table, json or yaml)\n"
    f"default_output = {DEFAULT_OUTPUT}\n"
    "\n"
    "[colors]\n"
    "disable_colors = false\n"
    "disable_bold = false\n"
    "# custom colors\n"
    "#title = bright_blue\n"
    "#header = white\n"
    "#index_even = blue\n"
    "#task_even = yellow\n"
    "#index_odd = green\n"
    "#task_odd = cyan\n"
)
COMMANDS = {
    'create': ['c'],
    'list': ['l', 'ls'],
    'get': ['g'],
    'update': ['u'],
    'delete': ['d', 'rm'],
    'help': ['h'],
    'version': [],
}


class TodoError(Exception):
    """Base class for errors that end a todolist invocation.

    Attributes:
        context (str):  short name of the check that failed.

    """
    context = "error"

    def __init__(self, message, context=None):
        super().__init__(message)
        if context:
            self.context = context


class EmptyInputError(TodoError):
    """Task text is blank."""
    context = "invalid input"


class IndexParseError(TodoError):
    """Index argument is not an integer."""
    context = "invalid index"


class OutOfBoundsError(TodoError):
    """Index is outside the task list."""
    context = "invalid index"


class ArgumentCountError(TodoError):
    """Too few arguments for the selected command."""
    context = "invalid arguments"


class PersistenceError(TodoError):
    """The task file could not be read or written."""
    context = "read tasks"


class ConfigError(TodoError):
    """The config file could not be created or parsed."""
    context = "config"


class TaskStore():
    """An ordered list of task strings, identified by position.

    Attributes:
        tasks (list):   the task texts, index 0 first.

    """
    def __init__(self, tasks=None):
        """Initializes a TaskStore() object."""
        self.tasks = list(tasks) if tasks else []

    def __len__(self):
        return len(self.tasks)

    @classmethod
    def load(cls, filename):
        """Read a task list from a YAML file. A missing or empty file
        gives an empty list.

        Args:
            filename (str): the task file.

        Returns:
            store (obj):    a TaskStore() object.

        """
        if not os.path.exists(filename):
            return cls()
        # BaseLoader keeps every scalar as its source text ('yes', '1.50')
        try:
            with open(filename, "r",
                      encoding="utf-8") as data_file:
                data = yaml.load(data_file, Loader=yaml.BaseLoader)
        except (OSError, IOError, UnicodeDecodeError,
                yaml.YAMLError) as err:
            raise PersistenceError(
                f"failure reading or parsing {filename}: {err}") from err
        if data is None:
            return cls()
        if not isinstance(data, list):
            raise PersistenceError(
                f"{filename} does not contain a list of tasks")
        for entry in data:
            if not isinstance(entry, str) or not entry.strip():
                raise PersistenceError(
                    f"{filename} contains an entry that is not text: "
                    f"{entry!r}")
        return cls(data)

    def save(self, filename):
        """Write the task list to a YAML file.

        Args:
            filename (str): the task file.

        """
        data_dir = os.path.dirname(filename)
        try:
            if data_dir:
                os.makedirs(data_dir, exist_ok=True)
            with open(filename, "w",
                      encoding="utf-8") as out_file:
                yaml.dump(
                    self.tasks,
                    out_file,
                    default_flow_style=False,
                    allow_unicode=True)
        except (OSError, IOError, yaml.YAMLError) as err:
            raise PersistenceError(
                f"failure writing {filename}: {err}",
                context="write tasks") from err

    @staticmethod
    def parse_index(token):
        """Convert an index argument to an integer.

        Args:
            token (str or int): the raw index.

        Returns:
            index (int):    the parsed index.

        """
        if isinstance(token, int) and not isinstance(token, bool):
            return token
        # ascii digits only, no '_' separators
        if isinstance(token, str) and re.fullmatch(r"[+-]?[0-9]+", token):
            return int(token)
        raise IndexParseError(f"'{token}' is not an integer")

    @staticmethod
    def _normalize(text):
        """Join argument tokens and reject blank text.

        Args:
            text (str or list): the text or the words making it up.

        Returns:
            text (str): the trimmed text.

        """
        if text is None:
            text = ""
        elif not isinstance(text, str):
            text = ' '.join(text)
        text = text.strip()
        if not text:
            raise EmptyInputError("empty task")
        return text

    def _valid_index(self, token):
        index = self.parse_index(token)
        if index < 0 or index >= len(self.tasks):
            if self.tasks:
                valid = f"0..{len(self.tasks) - 1}"
            else:
                valid = "the list is empty"
            raise OutOfBoundsError(
                f"out of index {index} ({valid})")
        return index

    def create(self, text):
        """Append a task.

        Args:
            text (str or list): the task text.

        Returns:
            index (int):    the new task's index.

        """
        text = self._normalize(text)
        self.tasks.append(text)
        return len(self.tasks) - 1

    def list(self):
        """Return (index, text) pairs for every task, in order."""
        return list(enumerate(self.tasks))

    def get(self, index):
        """Return the text of the task at an index."""
        return self.tasks[self._valid_index(index)]

    def update(self, index, text):
        """Replace a task's text. Each '@@' in the new text is replaced
        by the previous text of the task.

        Args:
            index (str or int): the task index.
            text (str or list): the new task text.

        Returns:
            previous (str): the text before the update.
            stored (str):   the text after the update.

        """
        index = self._valid_index(index)
        text = self._normalize(text)
        previous = self.tasks[index]
        self.tasks[index] = text.replace(BACKREF, previous)
        return previous, self.tasks[index]

    def delete(self, index):
        """Remove a task. Later tasks move down one index.

        Args:
            index (str or int): the task index.

        Returns:
            removed (str):  the text of the removed task.

        """
        index = self._valid_index(index)
        return self.tasks.pop(index)


class Todo():
    """Performs todo list operations.

    Attributes:
        config_file (str):  application config file.
        data_file (str):    file containing the task list.
        dflt_config (str):  the default config if none is present.

    """
    def __init__(
            self,
            config_file,
            data_file,
            dflt_config,
            override_file=None):
        """Initializes a Todo() object."""
        self.config_file = config_file
        self.config_dir = os.path.dirname(self.config_file)
        self.data_file = data_file
        self.dflt_config = dflt_config
        self.default_output = DEFAULT_OUTPUT

        # default colors
        self.color_title = "bright_blue"
        self.color_header = "white"
        self.color_index_even = "blue"
        self.color_task_even = "yellow"
        self.color_index_odd = "green"
        self.color_task_odd = "cyan"
        self.color_bold = True
        self.color_enabled = True

        # initial style definitions, these are updated after the config
        # file is parsed for custom colors
        self.style_title = None
        self.style_header = None
        self.style_index_even = None
        self.style_task_even = None
        self.style_index_odd = None
        self.style_task_odd = None

        self._default_config()
        self._parse_config()
        if override_file:
            self.data_file = override_file
        self.store = TaskStore.load(self.data_file)

    def _default_config(self):
        """Create a default configuration directory and file if they
        do not already exist.
        """
        if not os.path.exists(self.config_file):
            try:
                if self.config_dir:
                    os.makedirs(self.config_dir, exist_ok=True)
                with open(self.config_file, "w",
                          encoding="utf-8") as config_file:
                    config_file.write(self.dflt_config)
            except (OSError, IOError) as err:
                raise ConfigError(
                    "Config file doesn't exist "
                    "and can't be created") from err

    def _parse_config(self):
        """Read and parse the configuration file."""
        config = configparser.ConfigParser()
        if not os.path.isfile(self.config_file):
            raise ConfigError("Config file not found")
        try:
            with open(self.config_file, "r",
                      encoding="utf-8") as config_file:
                config.read_file(config_file)
        except (OSError, IOError, UnicodeDecodeError,
                configparser.Error) as err:
            raise ConfigError("Error reading config file") from err

        if "main" in config:
            if config["main"].get("data_file"):
                self.data_file = os.path.expandvars(
                    os.path.expanduser(
                        config["main"].get("data_file")))
            output = config["main"].get("default_output")
            if output:
                output = output.lower()
                if output in OUTPUT_FORMATS:
                    self.default_output = output
                else:
                    print(
                        "NOTICE: invalid config option 'default_output', "
                        f"defaulting to {DEFAULT_OUTPUT}."
                    )

        if "colors" in config:
            try:
                disable_colors = config["colors"].getboolean(
                    "disable_colors", False)
                disable_bold = config["colors"].getboolean(
                    "disable_bold", False)
            except ValueError:
                print(
                    "NOTICE: invalid value in [colors], "
                    "using default colors."
                )
                disable_colors = False
                disable_bold = False
            self.color_enabled = not disable_colors
            self.color_bold = not disable_bold
            for name in ['title', 'header', 'index_even', 'task_even',
                         'index_odd', 'task_odd']:
                if config["colors"].get(name):
                    setattr(self, f"color_{name}",
                            config["colors"].get(name))

        self._apply_colors()

    def _apply_colors(self):
        """Build rich styles from the configured color names. Invalid
        color names fall back to the terminal default.
        """
        def _style(color, bold=False):
            if not self.color_enabled:
                return Style(color="default")
            try:
                return Style(color=color, bold=bold and self.color_bold)
            except ColorParseError:
                return Style(color="default")

        self.style_title = _style(self.color_title, bold=True)
        self.style_header = _style(self.color_header, bold=True)
        self.style_index_even = _style(self.color_index_even)
        self.style_task_even = _style(self.color_task_even)
        self.style_index_odd = _style(self.color_index_odd)
        self.style_task_odd = _style(self.color_task_odd)

    def _print_task_list(self, output=None):
        """Print the task list in the requested format.

        Args:
            output (str):   plain, table, json or yaml (default from
        config).

        """
        output = (output or self.default_output).lower()
        tasks = self.store.list()
        if output == "plain":
            for index, task in tasks:
                print(index, task)
        elif output in ["yaml", "yml"]:
            print(yaml.dump(
                self.store.tasks,
                default_flow_style=False,
                allow_unicode=True), end="")
        elif output == "json":
            print(json.dumps(self.store.tasks, indent=4,
                             ensure_ascii=False))
        else:
            self._print_task_table(tasks)

    def _print_task_table(self, tasks):
        """Print the task list as a table, alternating row colors.

        Args:
            tasks (list):   (index, text) pairs.

        """
        console = Console()
        task_table = Table(
            title="Tasks",
            title_style=self.style_title,
            title_justify="left",
            box=box.HEAVY_HEAD,
            header_style=self.style_header,
            show_header=True,
            show_lines=False)
        task_table.add_column("ID", justify="left")
        task_table.add_column("Task")
        if tasks:
            for index, task in tasks:
                if index & 1 == 0:
                    task_table.add_row(
                        Text(str(index), style=self.style_index_even),
                        Text(task, style=self.style_task_even))
                else:
                    task_table.add_row(
                        Text(str(index), style=self.style_index_odd),
                        Text(task, style=self.style_task_odd))
        else:
            task_table.add_row("", "None")
        console.print(task_table)

    def _save(self):
        self.store.save(self.data_file)

    def create(self, words, output=None):
        """Create a new task and show the updated list.

        Args:
            words (list):   the words of the task text.
            output (str):   output format for the list.

        """
        if not words:
            raise ArgumentCountError("must be at least 1 argument")
        index = self.store.create(words)
        self._save()
        print(f"Added task: {index}")
        self._print_task_list(output)

    def list(self, output=None):
        """List all tasks.

        Args:
            output (str):   plain, table, json or yaml.

        """
        self._print_task_list(output)

    def get(self, args):
        """Show a single task.

        Args:
            args (list):    the index followed by any ignored arguments.

        """
        if not args:
            raise ArgumentCountError("must be at least 1 argument")
        task = self.store.get(args[0])
        print(f"{self.store.parse_index(args[0])}: {task}")

    def update(self, args, output=None):
        """Update a task and show the updated list.

        Args:
            args (list):    the index followed by the new task words.
            output (str):   output format for the list.

        """
        if not args:
            raise ArgumentCountError("must be at least 1 argument")
        previous, task = self.store.update(args[0], args[1:])
        self._save()
        index = self.store.parse_index(args[0])
        print(f"Updated task {index}: {previous} -> {task}")
        self._print_task_list(output)

    def delete(self, args, output=None):
        """Delete a task and show the updated list.

        Args:
            args (list):    the index followed by any ignored arguments.
            output (str):   output format for the list.

        """
        if not args:
            raise ArgumentCountError("must be at least 1 argument")
        task = self.store.delete(args[0])
        self._save()
        index = self.store.parse_index(args[0])
        print(f"Deleted task {index}: {task}")
        self._print_task_list(output)


def _error_exit(errormsg):
    """Print an error message and exit with a status of 1

    Args:
        errormsg (str): the error message to display.

    """
    print(f'ERROR: {errormsg}.')
    sys.exit(1)


def _normalize_command(argv):
    """Lowercase the command name so commands are case-insensitive.

    Args:
        argv (list):    the command line arguments.

    Returns:
        argv (list):    the arguments with the command lowercased.

    """
    argv = list(argv)
    names = set(COMMANDS)
    for aliases in COMMANDS.values():
        names.update(aliases)
    skip = False
    for pos, arg in enumerate(argv):
        if skip:
            skip = False
            continue
        if arg in ['-c', '--config', '-f', '--file']:
            skip = True
            continue
        if arg.startswith('-'):
            continue
        if arg.lower() in names:
            argv[pos] = arg.lower()
        break
    return argv


def parse_args(argv=None):
    """Parse command line arguments.

    Args:
        argv (list):    arguments to parse (default sys.argv[1:]).

    Returns:
        parser (obj):   the argument parser.
        args (obj):     the command line arguments provided.

    """
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description='A todo list for nerds.')
    parser._positionals.title = 'commands'
    parser.set_defaults(command=None)
    subparsers = parser.add_subparsers(
        metavar=f'(for more help: {APP_NAME} <command> -h)')
    output = argparse.ArgumentParser(add_help=False)
    output.add_argument(
        '-o',
        '--output',
        dest='output',
        metavar='<format>',
        type=str.lower,
        choices=OUTPUT_FORMATS,
        help="output format: plain, table, json or yaml")
    create = subparsers.add_parser(
        'create',
        aliases=COMMANDS['create'],
        parents=[output],
        help='create a new task')
    create.add_argument(
        'words',
        nargs='*',
        help='task text')
    create.set_defaults(command='create')
    listcmd = subparsers.add_parser(
        'list',
        aliases=COMMANDS['list'],
        parents=[output],
        help='list tasks')
    listcmd.set_defaults(command='list')
    get = subparsers.add_parser(
        'get',
        aliases=COMMANDS['get'],
        help='show a task')
    get.add_argument(
        'args',
        nargs='*',
        metavar='index',
        help='task index')
    get.set_defaults(command='get')
    update = subparsers.add_parser(
        'update',
        aliases=COMMANDS['update'],
        parents=[output],
        help="update a task ('@@' is replaced by the old text)")
    update.add_argument(
        'args',
        nargs='*',
        metavar='index words',
        help="task index and new text")
    update.set_defaults(command='update')
    delete = subparsers.add_parser(
        'delete',
        aliases=COMMANDS['delete'],
        parents=[output],
        help='delete a task')
    delete.add_argument(
        'args',
        nargs='*',
        metavar='index',
        help='task index')
    delete.set_defaults(command='delete')
    helpcmd = subparsers.add_parser(
        'help',
        aliases=COMMANDS['help'],
        help='show this help message')
    helpcmd.set_defaults(command='help')
    version = subparsers.add_parser(
        'version',
        help='show version info')
    version.set_defaults(command='version')
    parser.add_argument(
        '-c',
        '--config',
        dest='config',
        metavar='<file>',
        help='config file')
    parser.add_argument(
        '-f',
        '--file',
        dest='file',
        metavar='<file>',
        help='task list file')
    args = parser.parse_args(_normalize_command(argv))
    return parser, args


def main(argv=None):
    """Entry point. Parses arguments, creates Todo() object, calls
    requested method and parameters.

    """
    if os.environ.get("XDG_CONFIG_HOME"):
        config_file = os.path.join(
            os.path.expandvars(os.path.expanduser(
                os.environ["XDG_CONFIG_HOME"])), APP_NAME, "config")
    else:
        config_file = os.path.expandvars(
            os.path.expanduser(DEFAULT_CONFIG_FILE))

    data_file = os.path.expandvars(
        os.path.expanduser(DEFAULT_DATA_FILE))

    parser, args = parse_args(argv)

    if args.command == "help":
        parser.print_help()
        return
    if args.command == "version":
        print(f"{APP_NAME} {APP_VERS}")
        print(APP_COPYRIGHT)
        print(APP_LICENSE)
        return

    if args.config:
        config_file = os.path.expandvars(
            os.path.expanduser(args.config))
    override_file = None
    if args.file:
        override_file = os.path.expandvars(
            os.path.expanduser(args.file))

    try:
        todo = Todo(
            config_file,
            data_file,
            DEFAULT_CONFIG,
            override_file=override_file)

        if not args.command or args.command == "list":
            todo.list(getattr(args, 'output', None))
        elif args.command == "create":
            todo.create(args.words, args.output)
        elif args.command == "get":
            todo.get(args.args)
        elif args.command == "update":
            todo.update(args.args, args.output)
        elif args.command == "delete":
            todo.delete(args.args, args.output)
        else:
            sys.exit(1)
    except TodoError as err:
        _error_exit(f"{err.context}: {err}")


# entry point
if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)
