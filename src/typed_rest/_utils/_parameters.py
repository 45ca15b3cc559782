"""Path and query parameter containers.

Both containers are built by the caller for a single call and consumed once
when the operation URL is composed.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional, Union
from urllib.parse import quote, unquote_plus


def _is_multi_value(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(
        value, (str, bytes, bytearray, Mapping)
    )


def _escape(value: Any) -> str:
    return quote(str(value), safe="")


class PathParameters:
    """Ordered mapping of ``{placeholder}`` names to their URL values.

    Examples:
        ```python
        PathParameters({"id": 777, "key": "abc"})
        PathParameters(id=777, key="abc")
        ```
    """

    def __init__(
        self,
        values: Union[Mapping[str, Any], Iterable[tuple[str, Any]], None] = None,
        **kwargs: Any,
    ) -> None:
        self._values: dict[str, Any] = {}
        if values is not None:
            items = values.items() if isinstance(values, Mapping) else values
            for name, value in items:
                self.add(name, value)
        for name, value in kwargs.items():
            self.add(name, value)

    def add(self, name: str, value: Any) -> None:
        if name is None or not str(name).strip():
            raise ValueError("Path parameter name cannot be null or empty string")
        if name in self._values:
            raise ValueError(f"Path parameter {name} is already added.")
        self._values[name] = value

    def __getitem__(self, name: str) -> str:
        if name not in self._values:
            raise KeyError(f"Path parameter by name {name} does not exist in collection.")
        return self._stringify(self._values[name])

    def __setitem__(self, name: str, value: Any) -> None:
        if name not in self._values:
            raise KeyError(f"Path parameter by name {name} does not exist in collection.")
        self._values[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PathParameters({dict(self.items())!r})"

    @property
    def names(self) -> list[str]:
        return list(self._values)

    @property
    def is_empty(self) -> bool:
        return not self._values

    def items(self) -> Iterator[tuple[str, str]]:
        for name, value in self._values.items():
            yield name, self._stringify(value)

    def remove(self, name: str) -> None:
        self._values.pop(name, None)

    def clear(self) -> None:
        self._values.clear()

    @staticmethod
    def _stringify(value: Any) -> str:
        return "" if value is None else str(value)


class QueryParameter:
    """A single query string parameter.

    The value may be a scalar or an iterable of values; an iterable expands to
    one ``name=value`` pair per element. Values are percent-encoded unless the
    parameter is created with ``is_encoded=True``, in which case the given text
    is emitted verbatim.
    """

    def __init__(self, name: str, value: Any = None, is_encoded: bool = False) -> None:
        self.name = name
        self._encoded_value: Optional[str] = None
        if is_encoded:
            self._encoded_value = "" if value is None else str(value)
            self._value: Any = unquote_plus(self._encoded_value)
        else:
            self._value = value

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if value is None or not str(value).strip():
            raise ValueError("Name for Query parameter cannot be empty/whitespace string.")
        self._name = value

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self._value = value
        self._encoded_value = None

    @property
    def is_encoded(self) -> bool:
        return self._encoded_value is not None

    def __str__(self) -> str:
        if _is_multi_value(self._value):
            return "&".join(
                f"{self._name}={_escape(item)}"
                for item in self._value
                if item is not None
            )
        if self._encoded_value is not None:
            return f"{self._name}={self._encoded_value}"
        value = "" if self._value is None else self._value
        return f"{self._name}={_escape(value)}"

    def __repr__(self) -> str:
        return f"QueryParameter({self._name!r}, {self._value!r})"


class QueryParameterCollection:
    """Ordered query parameters; the same name may occur more than once.

    Indexing by name reads or rewrites every occurrence of that name, indexing
    by position returns the :class:`QueryParameter` itself.

    Examples:
        ```python
        query = QueryParameterCollection({"filter": "active", "page": 2})
        query.add("Ids", [7, 11, 21])
        str(query)  # 'filter=active&page=2&Ids=7&Ids=11&Ids=21'
        ```
    """

    def __init__(
        self,
        parameters: Union[
            Mapping[str, Any], Iterable[Union[QueryParameter, tuple[str, Any]]], None
        ] = None,
    ) -> None:
        self._parameters: list[QueryParameter] = []
        if parameters is None:
            return
        items = parameters.items() if isinstance(parameters, Mapping) else parameters
        for item in items:
            if isinstance(item, QueryParameter):
                self.append(item)
            else:
                name, value = item
                self.add(name, value)

    def add(self, name: str, value: Any = None, is_encoded: bool = False) -> None:
        self._parameters.append(QueryParameter(name, value, is_encoded))

    def append(self, parameter: QueryParameter) -> None:
        self._parameters.append(parameter)

    def contains_key(self, name: str) -> bool:
        return any(p.name == name for p in self._parameters)

    def remove(self, name: str) -> int:
        """Remove every occurrence of ``name``; returns how many were removed."""
        kept = [p for p in self._parameters if p.name != name]
        removed = len(self._parameters) - len(kept)
        self._parameters = kept
        return removed

    def clear(self) -> None:
        self._parameters.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains_key(name)

    def __iter__(self) -> Iterator[QueryParameter]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __getitem__(self, key: Union[str, int]) -> Any:
        if isinstance(key, int):
            return self._parameters[key]

        values = [p.value for p in self._parameters if p.name == key]
        if not values:
            return None
        if len(values) == 1:
            return values[0]
        return values

    def __setitem__(self, name: str, value: Any) -> None:
        existing = [p for p in self._parameters if p.name == name]
        values = list(value) if _is_multi_value(value) else [value]

        for index in range(max(len(existing), len(values))):
            if index < len(existing) and index < len(values):
                current, new = existing[index], values[index]
                if new is None:
                    self._parameters.remove(current)
                elif isinstance(new, QueryParameter):
                    self._parameters[self._parameters.index(current)] = new
                else:
                    current.value = new
            elif index < len(existing):
                self._parameters.remove(existing[index])
            else:
                new = values[index]
                if new is None:
                    continue
                if isinstance(new, QueryParameter):
                    self._parameters.append(new)
                else:
                    self.add(name, new)

    def __delitem__(self, name: str) -> None:
        self.remove(name)

    def __str__(self) -> str:
        return "&".join(
            rendered for rendered in (str(p) for p in self._parameters) if rendered
        )

    def __repr__(self) -> str:
        return f"QueryParameterCollection({str(self)!r})"
