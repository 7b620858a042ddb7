"""
Contract interface parsing and call-data encoding.

An ``AbiCodec`` is built once from a contract's JSON ABI and is immutable
afterwards. It resolves function names to their canonical signatures and
4-byte selectors, packs argument tuples with eth-abi, and decodes return data.
"""
import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from eth_abi import decode, encode, is_encodable_type
from eth_abi.exceptions import DecodingError, EncodingError
from eth_abi.grammar import normalize
from eth_utils import keccak

from .exceptions import (
    ArgumentEncodingError, InvalidAbiDescription, ResultDecodingError, UnknownFunction
)
from .utils import hex_to_bytes

logger = logging.getLogger(__name__)

AbiDescription = Union[str, bytes, Sequence[Dict[str, Any]]]


@dataclass(frozen=True)
class AbiFunction:
    """
    A single callable function of a contract interface.

    Attributes:
        name: Function name
        inputs: Canonical parameter types, in declaration order
        outputs: Canonical return types
        signature: Canonical signature, e.g. ``transfer(address,uint256)``
        selector: First 4 bytes of keccak256(signature)
        state_mutability: pure, view, nonpayable or payable
    """
    name: str
    inputs: Tuple[str, ...]
    outputs: Tuple[str, ...]
    signature: str
    selector: bytes
    state_mutability: str = "nonpayable"

    @property
    def is_read_only(self) -> bool:
        return self.state_mutability in ("view", "pure")


def _canonical_type(param: Any) -> str:
    if not isinstance(param, dict):
        raise InvalidAbiDescription(f"ABI parameter must be an object, got {type(param).__name__}")
    typ = param.get("type")
    if not isinstance(typ, str) or not typ:
        raise InvalidAbiDescription(f"ABI parameter is missing a type: {param!r}")

    if typ.startswith("tuple"):
        components = param.get("components")
        if not isinstance(components, list):
            raise InvalidAbiDescription(f"Tuple parameter is missing components: {param!r}")
        inner = ",".join(_canonical_type(c) for c in components)
        typ = f"({inner}){typ[len('tuple'):]}"

    return normalize(typ)


def _parse_params(entry: Dict[str, Any], key: str, fn_name: str) -> Tuple[str, ...]:
    params = entry.get(key, [])
    if not isinstance(params, list):
        raise InvalidAbiDescription(f"'{key}' of function {fn_name!r} must be a list")
    types = tuple(_canonical_type(p) for p in params)
    for typ in types:
        if not is_encodable_type(typ):
            raise InvalidAbiDescription(f"Unsupported type {typ!r} in function {fn_name!r}")
    return types


def _state_mutability(entry: Dict[str, Any]) -> str:
    if "stateMutability" in entry:
        return str(entry["stateMutability"])
    # Pre-0.4.16 compilers only emit constant/payable flags
    if entry.get("constant"):
        return "view"
    if entry.get("payable"):
        return "payable"
    return "nonpayable"


def _coerce(typ: str, value: Any) -> Any:
    """Accept hex strings where raw bytes are expected."""
    if typ.endswith("]") and isinstance(value, (list, tuple)):
        element = typ[:typ.rindex("[")]
        return [_coerce(element, v) for v in value]
    if typ.startswith("bytes") and isinstance(value, str):
        try:
            return hex_to_bytes(value)
        except ValueError as e:
            raise ArgumentEncodingError(f"Invalid hex for {typ}: {value!r}") from e
    return value


class AbiCodec:
    """
    Parsed contract interface with call encoding and result decoding.

    Overloaded functions are kept in declaration order under their shared name.
    """

    def __init__(self, description: AbiDescription):
        """
        Parse a contract interface description.

        Args:
            description: JSON ABI as a string/bytes, or an already-decoded list

        Raises:
            InvalidAbiDescription: If the description is malformed
        """
        entries = self._load(description)

        functions: Dict[str, List[AbiFunction]] = {}
        for entry in entries:
            if not isinstance(entry, dict):
                raise InvalidAbiDescription(f"ABI entry must be an object, got {type(entry).__name__}")
            if entry.get("type", "function") != "function":
                continue

            name = entry.get("name")
            if not isinstance(name, str) or not name:
                raise InvalidAbiDescription(f"Function entry is missing a name: {entry!r}")

            inputs = _parse_params(entry, "inputs", name)
            outputs = _parse_params(entry, "outputs", name)
            signature = f"{name}({','.join(inputs)})"
            functions.setdefault(name, []).append(AbiFunction(
                name=name,
                inputs=inputs,
                outputs=outputs,
                signature=signature,
                selector=keccak(text=signature)[:4],
                state_mutability=_state_mutability(entry),
            ))

        self._functions: Mapping[str, Tuple[AbiFunction, ...]] = MappingProxyType(
            {name: tuple(overloads) for name, overloads in functions.items()}
        )
        logger.debug(f"Parsed ABI with {len(self._functions)} function name(s)")

    @staticmethod
    def _load(description: AbiDescription) -> Sequence[Any]:
        if isinstance(description, (str, bytes)):
            try:
                description = json.loads(description)
            except ValueError as e:
                raise InvalidAbiDescription(f"ABI is not valid JSON: {e}") from e
        if not isinstance(description, (list, tuple)):
            raise InvalidAbiDescription(
                f"ABI must be a list of entries, got {type(description).__name__}"
            )
        return description

    @property
    def functions(self) -> Mapping[str, Tuple[AbiFunction, ...]]:
        """Read-only mapping of function name to its overloads"""
        return self._functions

    def __contains__(self, function_name: object) -> bool:
        return function_name in self._functions

    def _overloads(self, function_name: str) -> Tuple[AbiFunction, ...]:
        overloads = self._functions.get(function_name)
        if not overloads:
            raise UnknownFunction(function_name)
        return overloads

    def function(self, function_name: str, arity: Optional[int] = None) -> AbiFunction:
        """
        Look up a function, optionally narrowing overloads by argument count.

        Without ``arity`` the zero-argument overload is preferred, then the
        first declared one.

        Raises:
            UnknownFunction: If no function has this name
            ArgumentEncodingError: If no overload takes ``arity`` arguments
        """
        overloads = self._overloads(function_name)
        if arity is None:
            for fn in overloads:
                if not fn.inputs:
                    return fn
            return overloads[0]
        for fn in overloads:
            if len(fn.inputs) == arity:
                return fn
        raise ArgumentEncodingError(
            f"{function_name} takes {', '.join(str(len(f.inputs)) for f in overloads)} "
            f"argument(s), got {arity}"
        )

    def selector(self, function_name: str) -> bytes:
        """Return the 4-byte selector of a function."""
        return self.function(function_name).selector

    def encode_call(self, function_name: str, args: Sequence[Any] = ()) -> bytes:
        """
        Encode call data: selector followed by the ABI-encoded argument tuple.

        Args:
            function_name: Function to call
            args: Positional arguments matching the declared parameter types

        Returns:
            Call data bytes

        Raises:
            UnknownFunction: If the name is absent from the interface
            ArgumentEncodingError: If arity or argument types do not match
        """
        overloads = self._overloads(function_name)
        args = list(args)
        candidates = [fn for fn in overloads if len(fn.inputs) == len(args)]
        if not candidates:
            # Raises with the list of accepted arities
            self.function(function_name, arity=len(args))

        last_error: Optional[Exception] = None
        for fn in candidates:
            try:
                values = [_coerce(typ, value) for typ, value in zip(fn.inputs, args)]
                return fn.selector + encode(list(fn.inputs), values)
            except (ArgumentEncodingError, EncodingError, ValueError, TypeError, OverflowError) as e:
                last_error = e

        raise ArgumentEncodingError(
            f"Cannot encode arguments for {function_name}: {last_error}"
        ) from last_error

    def decode_output(
        self,
        function_name: str,
        data: Union[str, bytes],
        arity: Optional[int] = None
    ) -> Any:
        """
        Decode return data of a call.

        Returns:
            None for functions without outputs, the bare value for a single
            output, otherwise a tuple

        Raises:
            UnknownFunction: If the name is absent from the interface
            ResultDecodingError: If the data does not match the declared outputs
        """
        fn = self.function(function_name, arity=arity)
        if not fn.outputs:
            return None

        try:
            raw = hex_to_bytes(data) if isinstance(data, str) else bytes(data)
        except ValueError as e:
            raise ResultDecodingError(f"Return data is not valid hex: {e}") from e
        if not raw:
            raise ResultDecodingError(f"Empty return data for {fn.signature}")

        try:
            decoded = decode(list(fn.outputs), raw)
        except (DecodingError, ValueError, OverflowError) as e:
            raise ResultDecodingError(f"Cannot decode result of {fn.signature}: {e}") from e

        if len(decoded) == 1:
            return decoded[0]
        return tuple(decoded)
