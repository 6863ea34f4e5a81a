"""Record Traversal

Validates named fields of a record (dataclass instance, pydantic model or plain
object) and aggregates every failing field into an Errors keyed by error key.

Field lookup first builds a descriptor list for the record. Fields of embedded
sub-records are promoted into that list as if declared on the parent, for both
lookup and error keys; names declared on the parent shadow promoted ones.

Error keys come from, in order:
1. ``Field(..., key="...")``
2. the field annotation named by ``ValidationConfig.error_key_source``
   (dataclass ``metadata`` / pydantic ``json_schema_extra``); text before the
   first comma is used, ``"-"`` is ignored
3. the pydantic alias, when the key source is ``"json"``
4. the attribute name

Usage:
    @dataclass
    class Employee:
        name: str = ""

    @dataclass
    class Manager(Validatable):
        employee: Employee = embedded(default_factory=Employee)
        level: int = field(default=0, metadata={"json": "lvl"})

        def validate(self):
            return validate_struct(self,
                Field("name", Required),
                Field("level", Required),
            )

    Manager().validate()   # Errors: lvl: cannot be blank; name: cannot be blank.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping

from pydantic import BaseModel

from rulekit.config import ValidationConfig
from rulekit.context import Context
from rulekit.errors import Errors, InternalError
from rulekit.logging import record_logger
from .engine import evaluate
from .rules import Evaluation, Outcome, Rule, resolve_config
from .values import is_record

logger = record_logger()

EMBEDDED = "embedded"


def embedded(**kwargs: Any) -> Any:
    """``dataclasses.field`` marking an embedded sub-record whose fields are promoted."""
    metadata = {**kwargs.pop("metadata", {}), EMBEDDED: True}
    return dataclasses.field(metadata=metadata, **kwargs)


class Field:
    """Binds a record attribute to its rule chain, with an optional explicit error key."""

    __slots__ = ("name", "rules", "key")

    def __init__(self, name: str, *rules: Rule, key: str | None = None):
        self.name, self.rules, self.key = name, tuple(rules), key

    def __repr__(self) -> str: return f"Field({self.name!r}, rules={len(self.rules)})"


@dataclass(frozen=True, slots=True)
class FieldInfo:
    """Declared field of a record type."""
    name: str
    annotations: Mapping[str, Any]
    alias: str | None = None
    embedded: bool = False


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Resolved field: where its value lives and the key its errors are reported under."""
    owner: Any
    attribute: str
    key: str
    embedded: bool = False

    def get(self) -> Any: return getattr(self.owner, self.attribute)


@lru_cache(maxsize=512)
def _type_fields(cls: type) -> tuple[FieldInfo, ...]:
    if issubclass(cls, BaseModel):
        infos = []
        for name, info in cls.model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            infos.append(FieldInfo(name, extra, info.serialization_alias or info.alias, bool(extra.get(EMBEDDED))))
        return tuple(infos)
    return tuple(FieldInfo(f.name, f.metadata, None, bool(f.metadata.get(EMBEDDED))) for f in dataclasses.fields(cls))


def declared_fields(record: Any) -> tuple[FieldInfo, ...]:
    cls = type(record)
    if issubclass(cls, BaseModel) or dataclasses.is_dataclass(cls): return _type_fields(cls)
    names = [n for n in getattr(record, "__dict__", {}) if not n.startswith("_")]
    for klass in cls.__mro__:
        for slot in (s for s in getattr(klass, "__slots__", ()) if not s.startswith("_")):
            if slot not in names and hasattr(record, slot): names.append(slot)
    return tuple(FieldInfo(n, {}) for n in names)


def error_key(info: FieldInfo, key_source: str) -> str:
    tag = info.annotations.get(key_source)
    if isinstance(tag, str) and (name := tag.split(",", 1)[0].strip()) and name != "-": return name
    if key_source == "json" and info.alias: return info.alias
    return info.name


def describe_record(record: Any, key_source: str = "json") -> dict[str, FieldDescriptor]:
    """Descriptor per attribute name, embedded fields promoted into the parent.

    Promotion is breadth-first: a shallower field wins over a deeper one of the
    same name, and among equally deep ones the first declared wins.
    """
    descriptors: dict[str, FieldDescriptor] = {}
    level, seen = [record], set()
    while level:
        promoted = []
        for owner in level:
            if id(owner) in seen: continue
            seen.add(id(owner))
            for info in declared_fields(owner):
                descriptors.setdefault(info.name, FieldDescriptor(owner, info.name, error_key(info, key_source), info.embedded))
                if info.embedded and is_record(inner := getattr(owner, info.name, None)): promoted.append(inner)
        level = promoted
    return descriptors


def _validate_struct(evaluation: Evaluation, record: Any, fields: tuple[Field, ...]) -> Outcome:
    if not is_record(record):
        raise InternalError(TypeError(f"only a record can be validated, got {type(record).__name__}"))
    descriptors = describe_record(record, evaluation.config.error_key_source)

    errors = Errors()
    for i, item in enumerate(fields):
        if not isinstance(item, Field):
            raise InternalError(TypeError(f"field #{i} must be specified with Field"))
        if (descriptor := descriptors.get(item.name)) is None:
            raise InternalError(LookupError(f"field #{i} ({item.name!r}) cannot be found in {type(record).__name__}"))

        if (error := evaluate(evaluation, descriptor.get(), item.rules)) is None: continue
        if isinstance(error, InternalError):
            logger.warning("record_aborted", record=type(record).__name__, field=item.name, cause=repr(error.cause))
            return error
        if descriptor.embedded and isinstance(error, Errors) and item.key is None:
            errors.update(error)
            continue
        errors[item.key or descriptor.key] = error

    result = errors.filter()
    logger.debug("record_validated", record=type(record).__name__, fields=len(fields), failed=len(result or ()))
    return result


def validate_struct(record: Any, *fields: Field, config: ValidationConfig | None = None) -> Outcome:
    """Validate the given fields of ``record``; every failing field is reported.

    Raises InternalError for a non-record argument or an unknown field name.
    """
    return _validate_struct(Evaluation(None, resolve_config(config)), record, fields)


def validate_struct_with_context(ctx: Context | None, record: Any, *fields: Field,
                                 config: ValidationConfig | None = None) -> Outcome:
    return _validate_struct(Evaluation(ctx, resolve_config(config)), record, fields)
