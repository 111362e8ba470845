"""Translation of attribute validation rules into schema constraints.

Rule arguments arrive in three interchangeable shapes, all normalised to the
same output:

    {"min": 0}
    {"min": {"args": [0], "msg": "must be positive"}}
    {"len": [2, 10]}

Unknown rule names are skipped so that new host-framework validators never
break generation.
"""

import re
from typing import Any, Callable, Dict, List, Mapping, Optional, TYPE_CHECKING
from model2schema.config.logging import get_logger
from model2schema.errors import StrategyContractError

if TYPE_CHECKING:
    from model2schema.ir.attribute import AttributeDescriptor
    from model2schema.strategies.base import OutputStrategy

logger = get_logger(__name__)

# Type keys whose validation rules are rendered
VALIDATED_TYPES = frozenset(
    {
        "INTEGER",
        "BIGINT",
        "SMALLINT",
        "MEDIUMINT",
        "TINYINT",
        "FLOAT",
        "REAL",
        "DOUBLE",
        "DOUBLE PRECISION",
        "DECIMAL",
        "NUMBER",
        "STRING",
        "CHAR",
        "TEXT",
        "CITEXT",
    }
)

# JavaScript RegExp flag letters, in the order RegExp.prototype.toString emits them
_FLAG_LETTERS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
)
_FLAG_ORDER = "dgimsuvy"

# Characters with a meaning in ECMA-262 patterns
_SPECIAL_CHARS = re.compile(r"[.*+?^${}()|\[\]\\/]")
_UNESCAPED_SLASH = re.compile(r"(?<!\\)((?:\\\\)*)/")

_WRAPPER_KEYS = frozenset({"args", "msg", "message"})

# Keywords several rules may write; extra occurrences are kept under allOf
_STACKED_KEYWORDS = frozenset({"pattern", "not"})


def _unwrap(value: Any) -> Any:
    """
    Strip the ``{args, msg}`` wrapper from a rule argument.

    A wrapper without ``args`` (e.g. ``{"msg": "must be email"}``) enables a
    flag rule, so it unwraps to True.
    """
    if isinstance(value, Mapping) and value.keys() and set(value.keys()) <= _WRAPPER_KEYS:
        return value.get("args", True)
    return value


def _first(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _flatten(values: Any) -> List[Any]:
    """Flatten one level of nesting: [["a"], ["b"], "c"] -> ["a", "b", "c"]."""
    if not isinstance(values, (list, tuple)):
        return [values]
    result: List[Any] = []
    for item in values:
        if isinstance(item, (list, tuple)):
            result.extend(item)
        else:
            result.append(item)
    return result


def escape_literal(text: Any) -> str:
    """Escape a literal so it matches itself inside an ECMA-262 pattern."""
    return _SPECIAL_CHARS.sub(lambda m: "\\" + m.group(0), str(text))


def _flags_to_letters(flags: Any) -> str:
    if flags is None:
        return ""
    if isinstance(flags, int):
        letters = "".join(letter for flag, letter in _FLAG_LETTERS if flags & flag)
    else:
        letters = str(flags)
    return "".join(sorted(set(letters), key=lambda c: _FLAG_ORDER.find(c)))


def render_regexp(value: Any) -> Optional[str]:
    """
    Render a regular expression in its canonical ``/pattern/flags`` form.

    Accepts a compiled ``re.Pattern``, a ``[pattern, flags]`` pair (flags as
    letters or ``re`` flag bits) or a plain pattern string. Unescaped forward
    slashes are escaped and an empty pattern renders as ``(?:)``, matching
    RegExp.prototype.toString().

    Returns:
        Rendered string, or None if the value is not a recognised shape
    """
    if isinstance(value, re.Pattern):
        pattern, flags = value.pattern, value.flags
    elif isinstance(value, (list, tuple)) and value:
        pattern = value[0]
        flags = value[1] if len(value) > 1 else None
    elif isinstance(value, str):
        pattern, flags = value, None
    else:
        return None

    if isinstance(pattern, bytes):
        pattern = pattern.decode("utf-8")
    source = _UNESCAPED_SLASH.sub(r"\1\\/", str(pattern)) or "(?:)"
    return f"/{source}/{_flags_to_letters(flags)}"


# --- Individual rule handlers -------------------------------------------------
# Each handler receives the unwrapped argument and updates the result in place.


def _rule_min(arg: Any, result: Dict[str, Any]) -> None:
    value = _first(arg)
    if value is not None and value is not False:
        result["minimum"] = value


def _rule_max(arg: Any, result: Dict[str, Any]) -> None:
    value = _first(arg)
    if value is not None and value is not False:
        result["maximum"] = value


def _format_rule(fmt: str) -> Callable[[Any, Dict[str, Any]], None]:
    def handler(arg: Any, result: Dict[str, Any]) -> None:
        if arg:
            result["format"] = fmt

    return handler


def _pattern_rule(pattern: str) -> Callable[[Any, Dict[str, Any]], None]:
    def handler(arg: Any, result: Dict[str, Any]) -> None:
        if arg:
            result["pattern"] = pattern

    return handler


def _rule_not_empty(arg: Any, result: Dict[str, Any]) -> None:
    if arg:
        result["minLength"] = 1


def _rule_len(arg: Any, result: Dict[str, Any]) -> None:
    if not isinstance(arg, (list, tuple)) or not arg:
        return
    result["minLength"] = arg[0]
    if len(arg) > 1:
        result["maxLength"] = arg[1]


def _rule_contains(arg: Any, result: Dict[str, Any]) -> None:
    literal = _first(arg)
    if literal:
        result["pattern"] = f"^.*{escape_literal(literal)}.*$"


def _rule_not_contains(arg: Any, result: Dict[str, Any]) -> None:
    if isinstance(arg, (list, tuple)):
        alternatives = "|".join(escape_literal(item) for item in arg)
        result["pattern"] = f"^(?!.*({alternatives})).*$"
    elif arg not in (None, ""):
        result["pattern"] = f"^(?!.*{escape_literal(arg)}).*$"


def _rule_not_in(arg: Any, result: Dict[str, Any]) -> None:
    if arg is None or arg is True:
        return
    result["not"] = {"enum": _flatten(arg)}


def _rule_is(arg: Any, result: Dict[str, Any]) -> None:
    rendered = render_regexp(arg)
    if rendered is not None:
        result["regexp"] = rendered


def _rule_not(arg: Any, result: Dict[str, Any]) -> None:
    rendered = render_regexp(arg)
    if rendered is not None:
        result["not"] = {"regexp": rendered}


RULES: Dict[str, Callable[[Any, Dict[str, Any]], None]] = {
    "min": _rule_min,
    "max": _rule_max,
    "isEmail": _format_rule("email"),
    "isUUID": _format_rule("uuid"),
    "notEmpty": _rule_not_empty,
    "len": _rule_len,
    "isUrl": _format_rule("url"),
    "isAlpha": _pattern_rule("^[a-zA-Z]+$"),
    "isNumeric": _pattern_rule("^[0-9]+$"),
    "isAlphanumeric": _pattern_rule("^[a-zA-Z0-9]+$"),
    "isLowercase": _pattern_rule("^[a-z]+$"),
    "isUppercase": _pattern_rule("^[A-Z]+$"),
    "contains": _rule_contains,
    "notContains": _rule_not_contains,
    "notIn": _rule_not_in,
    "is": _rule_is,
    "not": _rule_not,
}


def translate_rules(rules: Optional[Mapping[str, Any]], warn_unknown: bool = False) -> Dict[str, Any]:
    """
    Translate validation rules into a schema constraint fragment.

    Args:
        rules: Mapping of rule name to rule argument (may be None)
        warn_unknown: Log a warning for rule names without a translation

    Returns:
        Constraint fragment. Rules are applied in mapping order. When two
        rules produce a ``pattern`` or ``not``, the first stays in place and
        the others are appended to ``allOf`` so every constraint holds; for
        any other keyword the later rule wins.
    """
    result: Dict[str, Any] = {}
    if not rules:
        return result

    for name, raw in rules.items():
        handler = RULES.get(name)
        if handler is None:
            if warn_unknown:
                logger.warning(f"Ignoring unsupported validation rule '{name}'")
            else:
                logger.debug(f"Skipping unsupported validation rule '{name}'")
            continue

        fragment: Dict[str, Any] = {}
        handler(_unwrap(raw), fragment)
        for keyword, value in fragment.items():
            if keyword in _STACKED_KEYWORDS and keyword in result and result[keyword] != value:
                result.setdefault("allOf", []).append({keyword: value})
            else:
                result[keyword] = value

    return result


class ValidationRuleMapper:
    """Adds strategy-rendered validation constraints for scalar attributes."""

    def map(self, descriptor: "AttributeDescriptor", strategy: "OutputStrategy") -> Dict[str, Any]:
        """
        Map an attribute's validation rules.

        Args:
            descriptor: Attribute being translated
            strategy: Active output strategy

        Returns:
            Constraint fragment; empty for composite and relationship types

        Raises:
            StrategyContractError: If the strategy does not return a mapping
                (None included; an empty dict means no constraints)
        """
        if descriptor.type_key not in VALIDATED_TYPES or not descriptor.validation_rules:
            return {}

        result = strategy.render_validation(descriptor.validation_rules)
        if not isinstance(result, Mapping):
            raise StrategyContractError(
                "render_validation", "return value not of type 'dict'"
            )
        return dict(result)
