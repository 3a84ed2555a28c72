# curvegrammar/grammar.py
"""
GRAMMAR LOADER: XML text → Grammar
==================================

DOCUMENT FORMAT:
----------------
    <rules max_depth="30">
        <rule name="entry">
            <call count="14" transforms="rz 5" rule="hbox"/>
        </rule>
        <rule name="forward" max_depth="90" successor="r" weight="2">
            <call rule="dbox"/>
            <call transforms="rz 5.6 tx 0.1 sa 0.996" rule="forward"/>
        </rule>
        <rule name="dbox">
            <instance transforms="s 0.55 2.0 1.25" shape="curve"/>
        </rule>
    </rules>

- <rules max_depth>        required, positive integer
- <rule name>              required; max_depth, successor, weight optional
- <call rule>              required; transforms and count optional
- <instance>               transforms optional; shape as attribute or as a
                           nested child element (e.g. <shape>curve</shape>)

Loading is all-or-nothing: any structural problem raises GrammarError and
no partial grammar is returned.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Union

from .errors import GrammarError
from .model import Call, Grammar, Instance, Rule

logger = logging.getLogger(__name__)


def _int_attr(element: ET.Element, name: str, default: int, where: str) -> int:
    """Read a non-negative integer attribute; tolerates surrounding whitespace."""
    raw = element.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise GrammarError(f"{where}: attribute {name}={raw!r} is not an integer") from None
    if value < 0:
        raise GrammarError(f"{where}: attribute {name}={value} must be non-negative")
    return value


def _parse_call(element: ET.Element, where: str) -> Call:
    rule = (element.get('rule') or '').strip()
    if not rule:
        raise GrammarError(f"{where}: <call> without a 'rule' attribute")
    count = _int_attr(element, 'count', 1, where)
    return Call(
        rule=rule,
        transforms=element.get('transforms', ''),
        count=count if count > 0 else 1,
    )


def _parse_instance(element: ET.Element) -> Instance:
    shape = element.get('shape')
    if shape is None:
        child = next(iter(element), None)
        if child is not None:
            shape = (child.text or '').strip() or child.tag
    return Instance(transforms=element.get('transforms', ''), shape=shape or '')


def _parse_rule(element: ET.Element, position: int) -> Rule:
    name = (element.get('name') or '').strip()
    if not name:
        raise GrammarError(f"rule #{position}: missing 'name' attribute")
    where = f"rule {name!r} (#{position})"

    calls = []
    instances = []
    for child in element:
        if child.tag == 'call':
            calls.append(_parse_call(child, where))
        elif child.tag == 'instance':
            instances.append(_parse_instance(child))
        else:
            logger.debug(f"{where}: ignoring unknown element <{child.tag}>")

    successor = (element.get('successor') or '').strip() or None

    return Rule(
        name=name,
        calls=tuple(calls),
        instances=tuple(instances),
        max_depth=_int_attr(element, 'max_depth', 0, where),
        successor=successor,
        weight=_int_attr(element, 'weight', 0, where),
    )


def load_grammar(text: str) -> Grammar:
    """
    Parse grammar XML text into a Grammar.

    Parameters:
    -----------
    text : str
        The XML document

    Returns:
    --------
    Grammar
        The fully loaded, immutable grammar

    Raises:
    -------
    GrammarError
        If the text is not well-formed XML or violates the document format
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise GrammarError(f"malformed grammar XML: {e}") from e

    if root.tag != 'rules':
        raise GrammarError(f"root element must be <rules>, got <{root.tag}>")

    max_depth = _int_attr(root, 'max_depth', 0, '<rules>')
    if max_depth <= 0:
        raise GrammarError("<rules> requires a positive 'max_depth' attribute")

    rules = []
    for child in root:
        if child.tag == 'rule':
            rules.append(_parse_rule(child, len(rules)))
        else:
            logger.debug(f"<rules>: ignoring unknown element <{child.tag}>")

    grammar = Grammar(max_depth=max_depth, rules=tuple(rules))

    for rule_name, target in grammar.unresolved_references():
        logger.warning(f"Rule {rule_name!r} references undefined rule {target!r}")

    logger.debug(
        f"Loaded grammar: {len(grammar.rules)} rules, "
        f"{len(grammar.rule_names())} names, max_depth={max_depth}"
    )
    return grammar


def load_grammar_file(path: Union[str, Path], encoding: Optional[str] = 'utf-8') -> Grammar:
    """Read a grammar XML file and parse it with `load_grammar`."""
    path = Path(path)
    logger.info(f"Loading grammar from: {path}")
    return load_grammar(path.read_text(encoding=encoding))
