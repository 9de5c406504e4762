"""
Windows Live profile normalization.

Maps the Live Connect ``/v5.0/me`` document onto the provider-agnostic
profile shape shared by all strategies (provider, id, displayName, name,
emails, photos) and keeps the original body alongside it.
"""

import json
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PROVIDER = "windows-live"
PICTURE_URL_TEMPLATE = "https://apis.live.net/v5.0/{id}/picture"

# Live email category -> profile email type, in output order
EMAIL_CATEGORIES = (
    ("account", "account"),
    ("personal", "home"),
    ("business", "work"),
    ("other", "other"),
)


class ProfileName(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    family_name: str = Field(default="", alias="familyName")
    given_name: str = Field(default="", alias="givenName")


class ProfileEmail(BaseModel):
    value: str
    type: Literal["account", "home", "work", "other"]
    primary: Optional[bool] = None


class ProfilePhoto(BaseModel):
    value: str


class NormalizedProfile(BaseModel):
    """Provider-agnostic user profile handed to the verify callback."""

    model_config = ConfigDict(populate_by_name=True)

    provider: str = PROVIDER
    id: Optional[str] = None
    username: str = ""
    display_name: str = Field(default="", alias="displayName")
    name: ProfileName = Field(default_factory=ProfileName)
    emails: List[ProfileEmail] = Field(default_factory=list)
    photos: List[ProfilePhoto] = Field(default_factory=list)
    raw: str = Field(default="", alias="_raw")
    json_data: Dict[str, Any] = Field(default_factory=dict, alias="_json")

    def to_dict(self) -> Dict[str, Any]:
        """Dump using the wire names (displayName, _raw, _json, ...)."""
        return self.model_dump(by_alias=True, exclude_none=True)


def _collect_emails(raw_emails: Any) -> List[ProfileEmail]:
    if not isinstance(raw_emails, dict):
        return []

    emails = [
        ProfileEmail(value=raw_emails[category], type=email_type)
        for category, email_type in EMAIL_CATEGORIES
        if raw_emails.get(category)
    ]

    preferred = raw_emails.get("preferred")
    if preferred:
        for email in emails:
            if email.value == preferred:
                email.primary = True

    return emails


def profile_from_json(body: str, data: Dict[str, Any]) -> NormalizedProfile:
    """Build a NormalizedProfile from an already parsed Live profile."""
    profile_id = data.get("id")
    profile_id = str(profile_id) if profile_id is not None else None

    photos = []
    if profile_id:
        photos.append(ProfilePhoto(value=PICTURE_URL_TEMPLATE.format(id=profile_id)))

    return NormalizedProfile(
        id=profile_id,
        username=data.get("username") or "",
        display_name=data.get("name") or "",
        name=ProfileName(
            family_name=data.get("last_name") or "",
            given_name=data.get("first_name") or "",
        ),
        emails=_collect_emails(data.get("emails")),
        photos=photos,
        raw=body,
        json_data=data,
    )


def parse_profile(body: str) -> NormalizedProfile:
    """
    Parse a raw ``/me`` response body.

    Raises json.JSONDecodeError when the body is not JSON, and ValueError
    when it is JSON but not an object.
    """
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in profile response, got {type(data).__name__}")
    return profile_from_json(body, data)
