r"""
Argsxd argument declarations.

Overview
- Word values
  • Boolean: payload of a boolean word, toggled by the bare word.
  • String: payload of a string word, replaced by the token after the word.

- Kinds
  • Unknown: placeholder kind of a fresh Arg; rejected at registration.
  • Flag: boolean switch, toggled by --name or -s.
  • Option: string value, taken from the token after --name or -s.
  • Word: bare literal token (no dash prefix) carrying a Boolean or a String.

- Arg
  • One declaration: long name, short character, help text, kind, required bit
    and the "set" bit the parser flips once it has seen the argument.
  • Mutators (flag/option/word/describe/alias/require) return the Arg so
    declarations read as a single chained expression.

Example
    >>> Arg("output").alias("o").describe("where to write").option("out.txt")
    arg(name='output', short='o', help='where to write', kind=option('out.txt'), required=False, set=False)

Notes
- Kinds and word values are immutable; the parser replaces an Arg's kind
  instead of mutating it.
- Registration (ArgParser.args) stores a copy of the Arg, so the host's
  object never observes parse results.
"""
import functools
import operator
import re


class Variant:
    """
    Immutable single-payload value shared by word values and argument kinds.

    Conventions
    - __payload__ names the accepted payload type (None for payload-less cases).
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used by __repr__.
    - Equality compares the concrete case and the payload; variants are hashable.
    - Variant, WordValue and ArgKind themselves cannot be instantiated.
    """
    __slots__ = ("_value",)
    __payload__ = None
    __typename__ = "variant"

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        cls.__typename__ = re.sub(r"(?<!^)(?=[A-Z])", r"-", cls.__name__).lower()

    def __init__(self, value=None, /):
        if type(self) in (Variant, WordValue, ArgKind):
            raise TypeError(f"{self.__typename__} is abstract; build one of its cases instead")
        if self.__payload__ is None:
            if value is not None:
                raise TypeError(f"{self.__typename__} does not take a value")
        elif not isinstance(value, self.__payload__):
            raise TypeError(f"{self.__typename__} value must be a {self.__payload__.__name__}")
        object.__setattr__(self, "_value", value)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{self.__typename__} is immutable")

    def __delattr__(self, name, /):
        raise AttributeError(f"{self.__typename__} is immutable")

    def __eq__(self, other, /):
        if not isinstance(other, Variant):
            return NotImplemented
        return type(self) is type(other) and self._value == other._value

    def __hash__(self):
        return hash((type(self), self._value))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return type(self), (() if self.__payload__ is None else (self._value,))

    def __repr__(self):
        if self.__payload__ is None:
            return f"{self.__typename__}()"
        return f"{self.__typename__}({self._value!r})"

    def __rich_repr__(self):
        if self.__payload__ is not None:
            yield self._value


class WordValue(Variant):
    """
    Payload of a Word argument: either Boolean or String.

    The accessors mirror each other: the one matching the case returns the
    payload, the other returns None.
    """
    __slots__ = ()

    def as_bool(self):
        return None

    def as_string(self):
        return None


class Boolean(WordValue):
    __slots__ = ()
    __payload__ = bool

    def as_bool(self):
        return self._value


class String(WordValue):
    __slots__ = ()
    __payload__ = str

    def as_string(self):
        return self._value


class ArgKind(Variant):
    """
    Kind of an argument, deciding how the parser recognises it and which getter reads it.
    """
    __slots__ = ()


class Unknown(ArgKind):
    """
    Kind of a freshly built Arg. Registering an Arg that still has it is a programmer error.
    """
    __slots__ = ()


class Flag(ArgKind):
    __slots__ = ()
    __payload__ = bool


class Option(ArgKind):
    __slots__ = ()
    __payload__ = str


class Word(ArgKind):
    """
    Kind of a bare-word argument.

    Accepts a WordValue, or a plain bool/str which is wrapped into Boolean/String.
    """
    __slots__ = ()
    __payload__ = WordValue

    def __init__(self, value=None, /):
        if isinstance(value, bool):
            value = Boolean(value)
        elif isinstance(value, str):
            value = String(value)
        super().__init__(value)


class Arg:
    """
    Declaration of one recognised command-line argument.

    Fields (read-only properties)
    - name: long form; the registry key, matched as --name (or bare for words).
    - short: single character matched as -s and inside clusters; defaults to name[0].
    - help: help text shown by ArgParser.print_help().
    - kind: one of Unknown/Flag/Option/Word; holds the default, then the parsed value.
    - required: when True, parsing fails if the argument is not observed.
    - set: True once the parser has observed the argument; never goes back to False.
    """
    __slots__ = ("_name", "_short", "_help", "_kind", "_required", "_set")

    def __init__(self, name, /):
        if not isinstance(name, str):
            raise TypeError("argument name must be a string")
        if not name:
            raise ValueError("argument name must be a non-empty string")
        self._name = name
        self._short = name[0]
        self._help = ""
        self._kind = Unknown()
        self._required = False
        self._set = False

    @property
    def name(self):
        return self._name

    @property
    def short(self):
        return self._short

    @property
    def help(self):
        return self._help

    @property
    def kind(self):
        return self._kind

    @property
    def required(self):
        return self._required

    @property
    def set(self):
        return self._set

    def flag(self, default=False, /):
        """Make this argument a Flag with the given default."""
        self._kind = Flag(default)
        return self

    def option(self, default="", /):
        """Make this argument an Option with the given default."""
        self._kind = Option(default)
        return self

    def word(self, default, /):
        """Make this argument a Word; `default` is a WordValue, a bool or a str."""
        self._kind = Word(default)
        return self

    def describe(self, help, /):
        if not isinstance(help, str):
            raise TypeError("argument help must be a string")
        self._help = help
        return self

    def alias(self, short, /):
        """Override the short character (defaults to the first character of the name)."""
        if not isinstance(short, str):
            raise TypeError("argument short must be a string")
        if len(short) != 1:
            raise ValueError("argument short must be a single character")
        self._short = short
        return self

    def require(self, required=True, /):
        if not isinstance(required, bool):
            raise TypeError("argument required must be a boolean")
        self._required = required
        return self

    def _mark(self):
        # Parser-side bookkeeping: observed in the input.
        self._set = True

    def __copy__(self):
        clone = object.__new__(type(self))
        for slot in Arg.__slots__:
            object.__setattr__(clone, slot, object.__getattribute__(self, slot))
        return clone

    def __repr__(self):
        return f"arg({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"

    def __rich_repr__(self):
        yield "name", self._name
        yield "short", self._short
        yield "help", self._help
        yield "kind", self._kind
        yield "required", self._required
        yield "set", self._set


__all__ = (
    "WordValue",
    "Boolean",
    "String",
    "ArgKind",
    "Unknown",
    "Flag",
    "Option",
    "Word",
    "Arg",
)
