"""
Checkout metadata round-tripped through Stripe.

The metadata bag attached to a Checkout Session is the only channel through
which the webhook learns what was bought. Stripe stores it as opaque strings
(keys up to 40 chars, values up to 500 chars), so the intent is a small
versioned struct with a strict, lossless text encoding:

    intent_version = "1"
    account_id     = "17"
    course_ids     = "3,5,9"          (decimal ids, purchase order kept)
    email          = "buyer@example.com"

`email` is optional: Stripe drops metadata keys whose value is empty, so a
blank email is left out of the bag. Parsing rejects any other missing key and
any unknown key instead of guessing.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from elearning.exceptions import InvalidMetadata, InvalidRequest

METADATA_VERSION = 1
MAX_VALUE_LENGTH = 500

_REQUIRED_KEYS = frozenset({"intent_version", "account_id", "course_ids"})
_OPTIONAL_KEYS = frozenset({"email"})
_ID_RE = re.compile(r"^[1-9][0-9]*$")


def _parse_id(raw: str, field: str) -> int:
    if not _ID_RE.match(raw):
        raise InvalidMetadata(f"Malformed {field} in checkout metadata: {raw!r}")
    return int(raw)


@dataclass(frozen=True)
class CheckoutMetadata:
    account_id: int
    course_ids: Tuple[int, ...]
    email: str = ""
    version: int = METADATA_VERSION

    def to_provider(self) -> Dict[str, str]:
        """
        Serialize into Stripe's metadata bag.

        Raises:
            InvalidRequest: a value would exceed Stripe's length limit
        """
        bag = {
            "intent_version": str(self.version),
            "account_id": str(self.account_id),
            "course_ids": ",".join(str(course_id) for course_id in self.course_ids),
        }
        if self.email:
            bag["email"] = self.email
        for key, value in bag.items():
            if len(value) > MAX_VALUE_LENGTH:
                raise InvalidRequest(
                    "Checkout request is too large.",
                    details={"field": key, "length": len(value)},
                )
        return bag

    @classmethod
    def from_provider(cls, bag: Any) -> "CheckoutMetadata":
        """
        Parse the metadata echoed back in a webhook event.

        Raises:
            InvalidMetadata: missing/extra keys, unknown version, malformed or
                duplicate ids, or an empty course list
        """
        if not isinstance(bag, Mapping) or not bag:
            raise InvalidMetadata("Checkout metadata is missing.")

        keys = set(bag.keys())
        missing = _REQUIRED_KEYS - keys
        extra = keys - _REQUIRED_KEYS - _OPTIONAL_KEYS
        if missing or extra:
            raise InvalidMetadata(
                "Checkout metadata has unexpected shape.",
                details={"missing": sorted(missing), "extra": sorted(extra)},
            )

        values = {key: bag[key] for key in keys}
        if not all(isinstance(value, str) for value in values.values()):
            raise InvalidMetadata("Checkout metadata values must be strings.")

        if values["intent_version"] != str(METADATA_VERSION):
            raise InvalidMetadata(
                f"Unsupported checkout metadata version: {values['intent_version']!r}"
            )

        account_id = _parse_id(values["account_id"], "account_id")

        raw_ids = values["course_ids"]
        if not raw_ids:
            raise InvalidMetadata("Checkout metadata lists no courses.")
        course_ids = tuple(_parse_id(part, "course_ids") for part in raw_ids.split(","))
        if len(set(course_ids)) != len(course_ids):
            raise InvalidMetadata("Checkout metadata lists a course more than once.")

        return cls(account_id=account_id, course_ids=course_ids, email=values.get("email", ""))
