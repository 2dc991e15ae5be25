"""
vcard.py
vCard 2.1 / 3.0 rendering of address-book rows.

Only rows that look like contacts are written: a row needs more than one
cell and at least one of PrimaryEmail, DisplayName, FirstName or LastName.
Column names are the ones Thunderbird uses in ``abook.mab``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, TextIO, Tuple

from mork_parser.store.cells import CellSet
from mork_parser.store.database import MorkDatabase

NAME_COLUMNS = ("PrimaryEmail", "DisplayName", "FirstName", "LastName")

# (street, extended, city, state, zip, country) per address kind
WORK_ADDRESS = ("WorkAddress", "WorkAddress2", "WorkCity", "WorkState", "WorkZipCode", "WorkCountry")
HOME_ADDRESS = ("HomeAddress", "HomeAddress2", "HomeCity", "HomeState", "HomeZipCode", "HomeCountry")

CONTACT_COLUMNS = (
    "LastName",
    "FirstName",
    "DisplayName",
    "PrimaryEmail",
    "WorkPhone",
    "FaxNumber",
    "HomePhone",
    "PagerNumber",
    "CellularNumber",
    *HOME_ADDRESS,
    *WORK_ADDRESS,
    "JobTitle",
    "Company",
    "Notes",
)

_ESCAPES = {
    "\r": "\\r",
    "\n": "\\n",
    ";": "\\;",
    ",": "\\,",
}


def vcard_escape(text: Optional[str]) -> str:
    """Escape CR, LF, ';' and ',' for use in a vCard property value."""
    if not text:
        return ""
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


@dataclass(frozen=True)
class VCardProfile:
    """Property tags for one vCard version, in output order."""
    version: str
    before_address: Tuple[Tuple[str, str], ...]
    work_address_tag: str
    home_address_tag: str
    after_address: Tuple[Tuple[str, str], ...]


VCARD_21 = VCardProfile(
    version="2.1",
    before_address=(
        ("FN", "DisplayName"),
        ("ORG", "Company"),
        ("TITLE", "JobTitle"),
        ("TEL;WORK;VOICE", "WorkPhone"),
        ("TEL;WORK;FAX", "FaxNumber"),
        ("TEL;PAGER", "PagerNumber"),
        ("TEL;CELL;VOICE", "CellularNumber"),
        ("TEL;HOME;VOICE", "HomePhone"),
    ),
    work_address_tag="ADR;WORK",
    home_address_tag="ADR;HOME",
    after_address=(
        ("EMAIL;PREF;INTERNET", "PrimaryEmail"),
        ("NOTE", "Notes"),
    ),
)

VCARD_30 = VCardProfile(
    version="3.0",
    before_address=(
        ("FN", "DisplayName"),
        ("EMAIL;type=INTERNET;type=PREF", "PrimaryEmail"),
        ("ORG", "Company"),
        ("TITLE", "JobTitle"),
        ("TEL;type=WORK;type=VOICE", "WorkPhone"),
        ("TEL;type=WORK;type=FAX", "FaxNumber"),
        ("TEL;type=PAGER", "PagerNumber"),
        ("TEL;type=CELL;type=VOICE", "CellularNumber"),
        ("TEL;type=HOME;type=VOICE", "HomePhone"),
    ),
    work_address_tag="ADR;type=WORK",
    home_address_tag="ADR;type=HOME",
    after_address=(
        ("NOTE", "Notes"),
    ),
)

PROFILES = {"2.1": VCARD_21, "3.0": VCARD_30}


def contact_fields(db: MorkDatabase, cells: CellSet) -> Dict[str, str]:
    """Resolved text of the contact columns present in ``cells``."""
    fields: Dict[str, str] = {}
    for name in CONTACT_COLUMNS:
        text = db.value_for_column(cells, name)
        if text is not None:
            fields[name] = text
    return fields


def is_contact(cells: CellSet, fields: Dict[str, str]) -> bool:
    if len(cells) <= 1:
        return False
    return any(name in fields for name in NAME_COLUMNS)


def _address_line(tag: str, fields: Dict[str, str], names: Sequence[str]) -> Optional[str]:
    street, extended, city, state, zip_code, country = names
    if not any(name in fields for name in (street, city, state, zip_code, country)):
        return None
    parts = ["", fields.get(extended), fields.get(street), fields.get(city),
             fields.get(state), fields.get(zip_code), fields.get(country)]
    return f"{tag}:" + ";".join(vcard_escape(p) for p in parts)


def render_vcard(fields: Dict[str, str], profile: VCardProfile) -> str:
    """Render one contact; ``fields`` maps column names to text."""
    lines = ["BEGIN:VCARD", f"VERSION:{profile.version}"]

    first, last = fields.get("FirstName"), fields.get("LastName")
    if first is not None or last is not None:
        # Family;Given;Middle;Prefix;Suffix
        lines.append(f"N:{vcard_escape(last)};{vcard_escape(first)};;;")

    for tag, name in profile.before_address:
        if name in fields:
            lines.append(f"{tag}:{vcard_escape(fields[name])}")

    for tag, names in (
        (profile.work_address_tag, WORK_ADDRESS),
        (profile.home_address_tag, HOME_ADDRESS),
    ):
        line = _address_line(tag, fields, names)
        if line:
            lines.append(line)

    for tag, name in profile.after_address:
        if name in fields:
            lines.append(f"{tag}:{vcard_escape(fields[name])}")

    lines.append("END:VCARD")
    return "\n".join(lines) + "\n"


def write_vcard(
    out: TextIO,
    db: MorkDatabase,
    cells: CellSet,
    *,
    version: str = "3.0",
) -> bool:
    """Write ``cells`` as a vCard if the row is a contact; returns whether it was."""
    try:
        profile = PROFILES[version]
    except KeyError:
        raise ValueError(f"Unsupported vCard version: {version!r}") from None

    fields = contact_fields(db, cells)
    if not is_contact(cells, fields):
        return False
    out.write(render_vcard(fields, profile))
    return True


def write_vcard_21(out: TextIO, db: MorkDatabase, cells: CellSet) -> bool:
    return write_vcard(out, db, cells, version="2.1")


def write_vcard_30(out: TextIO, db: MorkDatabase, cells: CellSet) -> bool:
    return write_vcard(out, db, cells, version="3.0")


def dump_vcards(out: TextIO, db: MorkDatabase, *, version: str = "3.0") -> int:
    """Write every contact row of the database; returns the number written."""
    written = 0
    for row in db.iter_rows():
        if write_vcard(out, db, row.cells, version=version):
            written += 1
    return written
