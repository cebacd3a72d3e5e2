"""
Argot interface: registry, parser and validator.

Overview
- Interface owns the ordered registry of commands and arguments, the
  configuration switches and the state of the last parse pass (selected
  command, selected arguments, unparsed tokens, raw tokens).
- parse(tokens) walks the raw token vector (token 0 is the program path and is
  always skipped), mutates the registered entities as a side effect and raises a
  ParseError subclass on the first failure. A successful tokenization pass ends
  with validate().
- print_manual(), exit(), fail() and parse_or_exit() are the process-facing
  helpers that turn a failure into a rendered message and an exit status.

Parsing, step by step
1. reset the state of the previous pass and record the raw tokens.
2. with no token beyond the program name: fail with NoCommandSelectedError when
   FAIL_ON_MISSING_OPTION is set, otherwise stop (nothing selected).
3. token 1 is matched against the command names (first registered match wins).
   A value-carrying command consumes the next token unless it is a known flag;
   a missing value is only acceptable when the command has a default.
4. every remaining token is, in this order:
   • a known flag: the argument is selected; a value-carrying argument consumes
     every following token up to the next known flag (at least one).
   • a cluster of short flags ("-abc"): expanded to "-a", "-b", "-c", each
     resolved as above; any unknown letter fails on the whole token.
   • anything else: kept in unparsed_arguments with ALLOW_UNKNOWN_ARGUMENTS,
     otherwise an UnknownArgumentError.
5. validate(): companion arguments required by the command, globally required
   arguments, then the custom validation of the command and of every selected
   argument (in selection order).

Quick example:
    >>> from argot import Interface, Configuration
    >>> cli = Interface("tool", configuration=Configuration.ALLOW_UNKNOWN_ARGUMENTS)
    >>> verbose = cli.argument("--verbose", "-v")
    >>> tags = cli.argument("--tags", "-t", type=str, multiple=True)
    >>> cli.parse("tool -v --tags x y mystery")
    >>> verbose.selected, tags.values, cli.unparsed_arguments
    (True, ('x', 'y', 'mystery'), ())

Threading
- An interface holds the state of one parse pass at a time; concurrent parse()
  calls on the same instance are not supported.
"""
import logging
import os
import shlex
import sys

from .arguments import Argument
from .commands import Command
from .configuration import Configuration
from .faults import *
from .faults import console as stderr
from .manual import render, console as stdout
from .utils import *

logger = logging.getLogger(__name__)


def _sanitize_text(name, value, /, *, optional=False):
    if optional and value is Unset:
        return None
    if not isinstance(value, str):
        raise TypeError(f"interface '{name}' must be a string")
    elif not (value := value.strip()):
        raise ValueError(f"interface '{name}' cannot be empty")
    return value


def _sanitize_tokens(tokens, /):
    if tokens is Unset:
        return list(sys.argv)
    if isinstance(tokens, str):
        return shlex.split(tokens)
    try:
        tokens = list(tokens)
    except TypeError:
        raise TypeError("parse() argument must be a string or an iterable of strings") from None
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() tokens must be strings, not %r" % type(token).__name__)
    return tokens


class Interface:
    """
    Registry of commands and arguments, and the parser working on them.

    Properties
    - name, version, about, configuration, colorful, fancy, manual
    - commands, arguments: registered entities in registration order (tuples).
    - selected: the Command selected by the last pass, or None.
    - selected_arguments, unparsed_arguments, raw_arguments: state of the last pass.
    """

    commands = mirror("commands")
    arguments = mirror("arguments")
    selected_arguments = mirror("selected_arguments")
    unparsed_arguments = mirror("unparsed_arguments")
    raw_arguments = mirror("raw_arguments")

    _default = None

    def __init__(
            self,
            name,
            /,
            version="0",
            about=Unset,
            configuration=Configuration(0),
            *,
            colorful=False,
            fancy=False,
            manual=Unset
    ):
        """
        Construct an Interface.

        Parameters
        - name: str
          Program name shown in the usage line and in error headers.
        - version: str
          Version string of the program.
        - about: Unset | str
          Free text printed under the usage line.
        - configuration: Configuration | int
          Behaviour switches (see Configuration).
        - colorful, fancy: bool
          Presentation of the manual and of the errors (styles, panels).
        - manual: Unset | Callable[[Interface], str | None]
          Custom manual printer; returning None falls back to the built-in page.
        """
        self._name = _sanitize_text("name", name)
        self._version = _sanitize_text("version", version)
        self._about = _sanitize_text("about", about, optional=True)
        if not isinstance(configuration, int):
            raise TypeError("interface 'configuration' must be a configuration")
        self._configuration = Configuration(configuration)
        if manual is not Unset and not callable(manual):
            raise TypeError("interface 'manual' must be callable")
        self._manual = manual
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

        self._commands = []
        self._arguments = []
        self._selected = None
        self._selected_arguments = []
        self._unparsed_arguments = []
        self._raw_arguments = []

    name = mirror("name")
    version = mirror("version")
    about = mirror("about")
    configuration = mirror("configuration")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    @property
    def manual(self):
        return coalesce(self._manual)

    @property
    def selected(self):
        return self._selected

    @classmethod
    def default(cls):
        """
        Shared interface for single-binary programs, built on first use.

        Nothing registers into it implicitly: declare entities through
        Interface.default().argument(...) / .command(...) like on any other one.
        """
        if cls._default is None:
            cls._default = cls(os.path.basename(sys.argv[0]) or "argot")
        return cls._default

    # --- registration ---

    def add(self, *entities):
        """
        Register detached arguments and commands, in order.

        Raises
        - TypeError: something that is neither an Argument nor a Command.
        - ValueError: an entity already registered into an interface.
        """
        seen = set()
        for entity in entities:
            if not isinstance(entity, Argument | Command):
                raise TypeError("add() arguments must be arguments or commands, not %r" % type(entity).__name__)
            if entity._interface is not Unset:
                raise ValueError(
                    "%s %r already belongs to interface %r" % (type(entity).__typename__, entity.label, entity._interface.name)
                )
            if id(entity) in seen:
                raise ValueError("%s %r is passed twice" % (type(entity).__typename__, entity.label))
            seen.add(id(entity))
        for entity in entities:
            entity._interface = self
            if isinstance(entity, Command):
                self._commands.append(entity)
            else:
                self._arguments.append(entity)
            logger.debug("registered %s %r into %r", type(entity).__typename__, entity.label, self._name)
        return self

    def argument(self, *args, **kwargs):
        """
        Build an Argument with the given parameters and register it.
        """
        argument = Argument(*args, **kwargs)
        self.add(argument)
        return argument

    def command(self, *args, **kwargs):
        """
        Build a Command with the given parameters and register it.
        """
        command = Command(*args, **kwargs)
        self.add(command)
        return command

    option = command

    def __add__(self, other):
        if isinstance(other, Argument | Command):
            return self.add(other)
        try:
            entities = tuple(other)
        except TypeError:
            return NotImplemented
        return self.add(*entities)

    __iadd__ = __add__

    def __contains__(self, entity):
        return any(entity is x for x in self._commands) or any(entity is x for x in self._arguments)

    # --- lookups ---

    def findcommand(self, token, /):
        """
        Return the first registered command named `token`, or None.
        """
        for command in self._commands:
            if command.name == token:
                return command
        return None

    def findargument(self, token, /):
        """
        Return the first registered argument whose short or long flag is `token`, or None.
        """
        for argument in self._arguments:
            if argument.matches(token):
                return argument
        return None

    # --- parsing ---

    def reset(self):
        """
        Clear the state of the last pass, including every registered entity.
        """
        self._selected = None
        self._selected_arguments.clear()
        self._unparsed_arguments.clear()
        self._raw_arguments = []
        for entity in self._commands:
            entity.reset()
        for entity in self._arguments:
            entity.reset()

    def parse(self, tokens=Unset, /):
        """
        Parse a raw token vector and validate the outcome.

        Parameters
        - tokens: Unset | str | Iterable[str]
          Unset reads sys.argv; a string is split the way a POSIX shell would.
          Token 0 is the program path and is always skipped.

        Raises
        - ParseError (one of its subclasses) on the first failure.
        """
        tokens = _sanitize_tokens(tokens)

        self.reset()
        self._raw_arguments = tokens
        logger.debug("parsing %r with %r", tokens, self._configuration)

        if len(tokens) <= 1:
            if Configuration.FAIL_ON_MISSING_OPTION in self._configuration:
                raise NoCommandSelectedError("no command selected", hint=self._selection_hint())
            logger.debug("nothing to parse")
            return

        index = 1

        if (command := self.findcommand(tokens[index])) is not None:
            index = self._select(command, tokens, index)
        elif Configuration.FAIL_ON_MISSING_OPTION in self._configuration:
            raise NoCommandSelectedError(
                "no command selected", token=tokens[index], hint=self._selection_hint()
            )

        while index < len(tokens):
            token = tokens[index]

            if (argument := self.findargument(token)) is not None:
                index = self._consume(argument, tokens, index)
            elif len(token) > 1 and token.startswith("-") and not token.startswith("--"):
                logger.debug("expanding short flag cluster %r", token)
                for char in token[1:]:
                    if (argument := self.findargument("-" + char)) is None:
                        raise UnknownArgumentError("unknown argument %r" % token, token=token)
                    index = self._consume(argument, tokens, index)
            elif Configuration.ALLOW_UNKNOWN_ARGUMENTS in self._configuration:
                logger.debug("keeping unknown token %r", token)
                self._unparsed_arguments.append(token)
            else:
                raise UnknownArgumentError("unknown argument %r" % token, token=token)

            index += 1

        self.validate()

    def _selection_hint(self):
        if not self._commands:
            return Unset
        return "choose one of: %s" % ", ".join(command.name for command in self._commands)

    def _select(self, command, tokens, index, /):
        # a second selection cannot happen: only token 1 is ever a selector
        if self._selected is not None:
            raise MultipleCommandsSelectedError(
                "multiple commands selected (first: %s, second: %s)" % (self._selected.name, command.name),
                command=command,
            )

        logger.debug("selected command %r", command.name)
        command._selected = True
        self._selected = command
        index += 1

        if not command.carries_value:
            return index

        if index < len(tokens) and self.findargument(tokens[index]) is None:
            result = command.parse(tokens[index])
            if not result:
                raise CommandParseError(result.message, command=command, token=tokens[index])
            logger.debug("command %r took value %r", command.name, tokens[index])
            return index + 1

        if not command.has_default:
            raise MissingCommandValueError(
                "missing required value for command %r" % command.name, command=command
            )
        logger.debug("command %r falls back to its default %r", command.name, command.default)
        return index

    def _consume(self, argument, tokens, index, /):
        logger.debug("selected argument %r", argument.longflag)
        argument._selected = True
        if not any(argument is x for x in self._selected_arguments):
            self._selected_arguments.append(argument)

        if not argument.carries_value:
            return index

        found = 0
        while index + 1 < len(tokens) and self.findargument(tokens[index + 1]) is None:
            index += 1
            result = argument.parse(tokens[index])
            if not result:
                raise ArgumentParseError(result.message, argument=argument, token=tokens[index])
            logger.debug("argument %r took value %r", argument.longflag, tokens[index])
            found += 1

        if not found:
            raise MissingArgumentValueError(
                "missing required value for argument %r" % argument.longflag,
                argument=argument,
                hint="pass a value right after %r" % argument.longflag,
            )
        return index

    def validate(self):
        """
        Enforce the required arguments and run the custom validations.

        Called by parse() at the end of a successful tokenization pass; the
        checks run in this order and the first failure is raised:
        1. every argument the selected command requires is selected or has a default.
        2. every argument declared required is selected (whatever the command).
        3. the custom validation of the selected command.
        4. the custom validation of every selected argument, in selection order.
        """
        command = self._selected

        if command is not None:
            for argument in command.requires:
                if not (any(argument is x for x in self._selected_arguments) or argument.has_default):
                    raise MissingRequiredArgumentError(
                        "missing required argument %r for command %r" % (argument.longflag, command.name),
                        command=command,
                        argument=argument,
                    )

        for argument in self._arguments:
            if argument.required and not argument.selected:
                raise MissingArgumentValueError(
                    "missing required value for argument %r" % argument.longflag,
                    argument=argument,
                    hint="this argument is required",
                )

        if command is not None and not (result := command.validate()):
            raise CommandValidationError(result.message, command=command)

        for argument in self._selected_arguments:
            if not (result := argument.validate()):
                raise ArgumentValidationError(result.message, argument=argument)

        logger.debug("validation passed")

    # --- process-facing helpers ---

    def needs_manual(self, error, /):
        """
        Whether the manual should be printed before reporting `error`.
        """
        if Configuration.PRINT_HELP_ON_EXIT in self._configuration:
            return True
        return (
            isinstance(error, NoCommandSelectedError) and
            Configuration.PRINT_HELP_FOR_NO_SELECTION in self._configuration
        )

    def print_manual(self):
        """
        Print the manual page: the custom printer's text, else the built-in page.
        """
        if self._manual is not Unset and (text := self._manual(self)) is not None:
            stdout.print(text, markup=False, highlight=False)
            return
        stdout.print(render(self, width=stdout.width))

    def exit(self, message, /, manual=False, code=0):
        """
        Print `message`, optionally the manual, and terminate with `code`.

        A non-zero code prints the message on stderr prefixed with "error:".
        The manual is printed when asked for or when PRINT_HELP_ON_EXIT is set.
        """
        if code:
            stderr.print("error: %s" % message, markup=False, highlight=False)
        else:
            stdout.print(message, markup=False, highlight=False)
        if manual or Configuration.PRINT_HELP_ON_EXIT in self._configuration:
            self.print_manual()
        sys.exit(code)

    def fail(self, error, /):
        """
        Report a ParseError the way a command-line program should, then exit(1).
        """
        if not isinstance(error, ParseError):
            raise TypeError("fail() argument must be a parse error")
        try:
            trigger(error, shell=True, prog=self._name, colorful=self._colorful, fancy=self._fancy)
        finally:
            # the diagnostic comes first, the manual after it
            if self.needs_manual(error):
                self.print_manual()

    def parse_or_exit(self, tokens=Unset, /):
        """
        parse(tokens), reporting any ParseError through fail().
        """
        try:
            self.parse(tokens)
        except ParseError as error:
            self.fail(error)

    def __repr__(self):
        return "interface(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "name", self._name
        yield "version", self._version
        yield "configuration", self._configuration
        yield "commands", len(self._commands)
        yield "arguments", len(self._arguments)


def parse(tokens=Unset, /):
    """
    Interface.default().parse(tokens)
    """
    return Interface.default().parse(tokens)


def parse_or_exit(tokens=Unset, /):
    """
    Interface.default().parse_or_exit(tokens)
    """
    return Interface.default().parse_or_exit(tokens)


def print_manual():
    """
    Interface.default().print_manual()
    """
    return Interface.default().print_manual()


__all__ = (
    "Interface",
    "parse",
    "parse_or_exit",
    "print_manual",
)
