"""Network validators: ``ip``, ``cidr``, ``mac`` and ``addr``."""

from __future__ import annotations

import ipaddress
import re
from typing import Any

from fieldtag.errors import ValidationError
from fieldtag.helpers import type_name
from fieldtag.validation.validator import Validator, new_validator

_MAC = re.compile(
    r"(?:[0-9A-Fa-f]{2}:){5}[0-9A-Fa-f]{2}"
    r"|(?:[0-9A-Fa-f]{2}-){5}[0-9A-Fa-f]{2}"
    r"|(?:[0-9A-Fa-f]{4}\.){2}[0-9A-Fa-f]{4}"
)

_IP_TYPES = (ipaddress.IPv4Address, ipaddress.IPv6Address)
_CIDR_TYPES = (
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    ipaddress.IPv4Interface,
    ipaddress.IPv6Interface,
)


def split_host_port(addr: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[v6host]:port``; missing parts come back empty.

    Examples:
        >>> split_host_port("localhost:80")
        ('localhost', '80')
        >>> split_host_port("[::1]:8080")
        ('::1', '8080')
        >>> split_host_port("localhost")
        ('', '')
    """
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0 or addr[end + 1 : end + 2] != ":":
            return "", ""
        return addr[1:end], addr[end + 2 :]

    host, sep, port = addr.rpartition(":")
    if not sep or ":" in host:
        return "", ""
    return host, port


def ip() -> Validator:
    """An IPv4/IPv6 address string or ``ipaddress`` address object."""

    def validate(_ctx: Any, value: Any) -> None:
        if isinstance(value, _IP_TYPES):
            return
        if not isinstance(value, str):
            raise ValidationError(f"unsupported type {type_name(value)}")
        try:
            ipaddress.ip_address(value)
        except ValueError as exc:
            raise ValidationError("the string is not a valid ip") from exc

    return new_validator("ip", validate)


def cidr() -> Validator:
    """A ``address/prefix`` string or ``ipaddress`` network object."""

    def validate(_ctx: Any, value: Any) -> None:
        if isinstance(value, _CIDR_TYPES):
            return
        if not isinstance(value, str):
            raise ValidationError(f"unsupported type {type_name(value)}")
        if "/" not in value:
            raise ValidationError("the string is not a valid cidr")
        try:
            ipaddress.ip_interface(value)
        except ValueError as exc:
            raise ValidationError("the string is not a valid cidr") from exc

    return new_validator("cidr", validate)


def mac() -> Validator:
    """A 48-bit MAC: ``xx:xx:..``, ``xx-xx-..`` or ``xxxx.xxxx.xxxx``."""

    def validate(_ctx: Any, value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"expect a string, but got {type_name(value)}")
        if not _MAC.fullmatch(value):
            raise ValidationError("the string is not a valid mac")

    return new_validator("mac", validate)


def addr() -> Validator:
    """A ``host:port`` address with both parts present."""

    def validate(_ctx: Any, value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"unsupported type {type_name(value)}")
        host, port = split_host_port(value)
        if not host or not port:
            raise ValidationError("the string is not a valid address")

    return new_validator("addr", validate)
