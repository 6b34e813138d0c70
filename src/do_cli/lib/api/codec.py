"""
JSON codec between DigitalOcean wire payloads and domain entities

Decoding is defensive: a missing or mistyped field takes its default instead
of failing the whole parse. Only a missing top-level envelope key is fatal.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

from ..errors import MalformedResponseError
from .types import (
    Account,
    CreateDropletRequest,
    Droplet,
    Image,
    Kernel,
    Networks,
    NetworkV4,
    NetworkV6,
    Region,
    Size,
    Team,
)

logger = logging.getLogger("do_cli.lib.api.codec")

T = TypeVar("T")

JSONObject = Dict[str, Any]


# Field helpers

def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_string(obj: JSONObject, key: str) -> Optional[str]:
    """String field, or None if absent, null or not a string"""
    value = obj.get(key)
    return value if isinstance(value, str) else None


def get_int(obj: JSONObject, key: str, default: int = 0) -> int:
    """Integer field, or default if absent or not a number"""
    value = obj.get(key)
    if not _is_number(value):
        return default
    try:
        return int(value)
    except (OverflowError, ValueError):
        return default


def get_float(obj: JSONObject, key: str, default: float = 0.0) -> float:
    """Float field, or default if absent or not a number"""
    value = obj.get(key)
    return float(value) if _is_number(value) else default


def get_bool(obj: JSONObject, key: str, default: bool = False) -> bool:
    """Boolean field, or default if absent or not a boolean"""
    value = obj.get(key)
    return value if isinstance(value, bool) else default


def get_string_list(obj: JSONObject, key: str) -> Tuple[str, ...]:
    """String array in source order; non-strings are skipped, non-arrays are empty"""
    value = obj.get(key)
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def get_int_list(obj: JSONObject, key: str) -> Tuple[int, ...]:
    """Integer array in source order; non-numbers are skipped, non-arrays are empty"""
    value = obj.get(key)
    if not isinstance(value, list):
        return ()
    result = []
    for item in value:
        if not _is_number(item):
            continue
        try:
            result.append(int(item))
        except (OverflowError, ValueError):
            # NaN and Infinity are accepted by the JSON parser
            continue
    return tuple(result)


def get_object(obj: JSONObject, key: str, decoder: Callable[[JSONObject], T]) -> Optional[T]:
    """
    Decode a nested object into an owned sub-record

    Args:
        obj: Parent JSON object
        key: Field name
        decoder: Function building the sub-record from a JSON object

    Returns:
        The decoded sub-record, or None if the key is absent or null.
        A present value of any other shape decodes to an all-default record.
    """
    if key not in obj or obj[key] is None:
        return None
    value = obj[key]
    return decoder(value if isinstance(value, dict) else {})


def get_timestamp(obj: JSONObject, key: str) -> Optional[datetime]:
    """ISO-8601 timestamp field as an aware datetime, or None"""
    value = get_string(obj, key)
    if not value:
        return None
    return parse_timestamp(value)


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an RFC3339 / ISO-8601 string; naive values are taken as UTC"""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unparseable timestamp: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# Entity decoders

def decode_team(obj: JSONObject) -> Team:
    return Team(uuid=get_string(obj, "uuid"), name=get_string(obj, "name"))


def decode_account(obj: JSONObject) -> Account:
    return Account(
        droplet_limit=get_int(obj, "droplet_limit"),
        floating_ip_limit=get_int(obj, "floating_ip_limit"),
        volume_limit=get_int(obj, "volume_limit"),
        email=get_string(obj, "email"),
        uuid=get_string(obj, "uuid"),
        email_verified=get_bool(obj, "email_verified"),
        status=get_string(obj, "status"),
        status_message=get_string(obj, "status_message"),
        team=get_object(obj, "team", decode_team),
    )


def decode_region(obj: JSONObject) -> Region:
    return Region(
        name=get_string(obj, "name"),
        slug=get_string(obj, "slug"),
        features=get_string_list(obj, "features"),
        available=get_bool(obj, "available"),
        sizes=get_string_list(obj, "sizes"),
    )


def decode_size(obj: JSONObject) -> Size:
    return Size(
        slug=get_string(obj, "slug"),
        memory=get_int(obj, "memory"),
        vcpus=get_int(obj, "vcpus"),
        disk=get_int(obj, "disk"),
        transfer=get_float(obj, "transfer"),
        price_monthly=get_float(obj, "price_monthly"),
        price_hourly=get_float(obj, "price_hourly"),
        regions=get_string_list(obj, "regions"),
        available=get_bool(obj, "available"),
    )


def decode_kernel(obj: JSONObject) -> Kernel:
    return Kernel(
        id=get_int(obj, "id"),
        name=get_string(obj, "name"),
        version=get_string(obj, "version"),
    )


def decode_image(obj: JSONObject) -> Image:
    return Image(
        id=get_int(obj, "id"),
        name=get_string(obj, "name"),
        type=get_string(obj, "type"),
        distribution=get_string(obj, "distribution"),
        slug=get_string(obj, "slug"),
        public=get_bool(obj, "public"),
        regions=get_string_list(obj, "regions"),
        min_disk_size=get_int(obj, "min_disk_size"),
        size_gigabytes=get_float(obj, "size_gigabytes"),
        created_at=get_timestamp(obj, "created_at"),
        description=get_string(obj, "description"),
        tags=get_string_list(obj, "tags"),
        status=get_string(obj, "status"),
        error_message=get_string(obj, "error_message"),
    )


def _objects(obj: JSONObject, key: str) -> List[JSONObject]:
    value = obj.get(key)
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, dict) else {} for item in value]


def decode_networks(obj: JSONObject) -> Networks:
    v4 = tuple(
        NetworkV4(
            ip_address=get_string(item, "ip_address"),
            netmask=get_string(item, "netmask"),
            gateway=get_string(item, "gateway"),
            type=get_string(item, "type"),
        )
        for item in _objects(obj, "v4")
    )
    v6 = tuple(
        NetworkV6(
            ip_address=get_string(item, "ip_address"),
            netmask=get_int(item, "netmask"),
            gateway=get_string(item, "gateway"),
            type=get_string(item, "type"),
        )
        for item in _objects(obj, "v6")
    )
    return Networks(v4=v4, v6=v6)


def decode_droplet(obj: JSONObject) -> Droplet:
    return Droplet(
        id=get_int(obj, "id"),
        name=get_string(obj, "name"),
        memory=get_int(obj, "memory"),
        vcpus=get_int(obj, "vcpus"),
        disk=get_int(obj, "disk"),
        locked=get_bool(obj, "locked"),
        status=get_string(obj, "status"),
        created_at=get_timestamp(obj, "created_at"),
        size_slug=get_string(obj, "size_slug"),
        vpc_uuid=get_string(obj, "vpc_uuid"),
        kernel=get_object(obj, "kernel", decode_kernel),
        image=get_object(obj, "image", decode_image),
        size=get_object(obj, "size", decode_size),
        region=get_object(obj, "region", decode_region),
        networks=get_object(obj, "networks", decode_networks),
        features=get_string_list(obj, "features"),
        tags=get_string_list(obj, "tags"),
        volume_ids=get_string_list(obj, "volume_ids"),
        backup_ids=get_int_list(obj, "backup_ids"),
        snapshot_ids=get_int_list(obj, "snapshot_ids"),
    )


# Envelopes

def parse_json(body: Union[bytes, str]) -> Any:
    """Parse a response body into a generic JSON value"""
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Response is not valid JSON: {str(e)}") from e
    except RecursionError as e:
        raise MalformedResponseError("Response JSON is nested too deeply") from e


def _envelope(document: Any, key: str, expected: type) -> Any:
    if not isinstance(document, dict) or key not in document:
        raise MalformedResponseError(f"Response is missing the '{key}' key")
    value = document[key]
    if not isinstance(value, expected):
        raise MalformedResponseError(
            f"Response '{key}' is not a JSON {'array' if expected is list else 'object'}"
        )
    return value


def decode_account_envelope(document: Any) -> Account:
    """Decode {"account": {...}}"""
    return decode_account(_envelope(document, "account", dict))


def decode_droplet_envelope(document: Any) -> Droplet:
    """Decode {"droplet": {...}}"""
    return decode_droplet(_envelope(document, "droplet", dict))


def decode_droplets_envelope(document: Any) -> List[Droplet]:
    """Decode {"droplets": [...]} preserving array order; non-object elements are skipped"""
    items = _envelope(document, "droplets", list)
    droplets = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.debug(f"Skipping non-object droplets[{index}]: {type(item).__name__}")
            continue
        droplets.append(decode_droplet(item))
    return droplets


def parse_error_message(body: Union[bytes, str]) -> Optional[str]:
    """Message from a DigitalOcean error body, falling back to the raw text"""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    text = body.strip()
    if not text:
        return None
    try:
        document = json.loads(text)
    except ValueError:
        return text
    if isinstance(document, dict):
        message = get_string(document, "message")
        if message:
            return message
        errors = document.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            return get_string(errors[0], "message") or text
    return text


# Encoding

def encode_create_droplet(request: CreateDropletRequest) -> JSONObject:
    """
    Build the JSON body for a create-droplet request

    Required fields are always present. Optional fields are left out
    entirely when unset; null is never emitted.
    """
    payload: JSONObject = {
        "name": request.name,
        "region": request.region,
        "size": request.size,
        "image": request.image,
    }
    for key in ("ssh_keys", "tags", "volumes"):
        values = list(getattr(request, key) or ())
        if values:
            payload[key] = values
    for key in ("user_data", "vpc_uuid"):
        value = getattr(request, key)
        if value:
            payload[key] = value
    for key in ("backups", "ipv6", "monitoring", "private_networking"):
        if getattr(request, key):
            payload[key] = True
    return payload


def dumps(payload: JSONObject) -> str:
    return json.dumps(payload)
