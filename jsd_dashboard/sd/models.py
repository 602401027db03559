"""
Service Desk records + parsing of the remote JSON shapes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union


@dataclass(frozen=True)
class UserProfile:
    key: str
    name: str
    display_name: str
    email_address: str
    avatar_url: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class DateInfo:
    iso8601: Optional[str]
    friendly: Optional[str]
    epoch_millis: Optional[int]


@dataclass(frozen=True)
class Reporter:
    key: Optional[str]
    name: Optional[str]
    display_name: Optional[str]
    email_address: Optional[str]
    account_id: Optional[str]
    avatar_url: Optional[str]


@dataclass(frozen=True)
class CurrentStatus:
    status: str
    status_date: Optional[DateInfo]


@dataclass(frozen=True)
class ScalarValue:
    text: str

    def display(self) -> str:
        return self.text


@dataclass(frozen=True)
class StructuredValue:
    mapping: Mapping[str, Any]

    def display(self) -> str:
        for k in ("name", "value"):
            v = self.mapping.get(k)
            if v is not None and str(v) != "":
                return str(v)
        return "Unknown"


FieldValue = Union[ScalarValue, StructuredValue]


@dataclass(frozen=True)
class RequestField:
    field_id: str
    label: str
    value: FieldValue


@dataclass(frozen=True)
class ServiceDeskRequest:
    issue_id: str
    issue_key: str
    request_type_id: str
    service_desk_id: str
    created_date: Optional[DateInfo]
    reporter: Optional[Reporter]
    current_status: Optional[CurrentStatus]
    field_values: List[RequestField]
    web_url: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def status(self) -> str:
        return self.current_status.status if self.current_status else ""

    def get_field(self, field_id: str) -> Optional[RequestField]:
        for f in self.field_values:
            if f.field_id == field_id:
                return f
        return None


def _opt_str(v: Any) -> Optional[str]:
    return str(v) if v is not None else None


def _opt_int(v: Any) -> Optional[int]:
    if v is None:
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def _avatar_48(avatars: Any) -> Optional[str]:
    if not isinstance(avatars, dict):
        return None
    return _opt_str(avatars.get("48x48"))


def parse_field_value(value: Any) -> FieldValue:
    if value is None:
        return ScalarValue("")
    if isinstance(value, dict):
        return StructuredValue(dict(value))
    if isinstance(value, list):
        parts = [parse_field_value(v).display() for v in value]
        return ScalarValue(", ".join(p for p in parts if p))
    return ScalarValue(str(value))


def parse_user_profile(data: Dict[str, Any]) -> UserProfile:
    return UserProfile(
        key=str(data.get("key") or ""),
        name=str(data.get("name") or ""),
        display_name=str(data.get("displayName") or ""),
        email_address=str(data.get("emailAddress") or ""),
        avatar_url=_avatar_48(data.get("avatarUrls")),
        raw=data,
    )


def parse_date_info(data: Any) -> Optional[DateInfo]:
    if not isinstance(data, dict):
        return None
    return DateInfo(
        iso8601=_opt_str(data.get("iso8601")),
        friendly=_opt_str(data.get("friendly")),
        epoch_millis=_opt_int(data.get("epochMillis")),
    )


def parse_reporter(data: Any) -> Optional[Reporter]:
    if not isinstance(data, dict):
        return None
    links = data.get("_links") or {}
    return Reporter(
        key=_opt_str(data.get("key")),
        name=_opt_str(data.get("name")),
        display_name=_opt_str(data.get("displayName")),
        email_address=_opt_str(data.get("emailAddress")),
        account_id=_opt_str(data.get("accountId")),
        avatar_url=_avatar_48(links.get("avatarUrls") if isinstance(links, dict) else None),
    )


def parse_current_status(data: Any) -> Optional[CurrentStatus]:
    if not isinstance(data, dict):
        return None
    return CurrentStatus(
        status=str(data.get("status") or ""),
        status_date=parse_date_info(data.get("statusDate")),
    )


def parse_request(data: Dict[str, Any]) -> ServiceDeskRequest:
    fields: List[RequestField] = []
    for f in data.get("requestFieldValues") or []:
        if not isinstance(f, dict):
            continue
        fields.append(
            RequestField(
                field_id=str(f.get("fieldId") or ""),
                label=str(f.get("label") or ""),
                value=parse_field_value(f.get("value")),
            )
        )

    links = data.get("_links") or {}
    return ServiceDeskRequest(
        issue_id=str(data.get("issueId") or ""),
        issue_key=str(data.get("issueKey") or ""),
        request_type_id=str(data.get("requestTypeId") or ""),
        service_desk_id=str(data.get("serviceDeskId") or ""),
        created_date=parse_date_info(data.get("createdDate")),
        reporter=parse_reporter(data.get("reporter")),
        current_status=parse_current_status(data.get("currentStatus")),
        field_values=fields,
        web_url=_opt_str(links.get("web")) if isinstance(links, dict) else None,
        raw=data,
    )
