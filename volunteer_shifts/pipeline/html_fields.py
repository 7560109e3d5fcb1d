"""Extract shifts from a location list page."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from volunteer_shifts.common.clock import convert_12h_to_24h
from volunteer_shifts.common.geometry import extract_point_from_maps_href
from volunteer_shifts.common.models import Shift
from volunteer_shifts.common.states import state_from_address, suburb_from_address

# "Wed 25 June, 9:30 am - 11:30 am"
SHIFT_TIME_RE = re.compile(
    r"(\w{3})\s+\d+\s+\w+,\s*(\d{1,2}:\d{2}\s*(?:am|pm))\s*-\s*(\d{1,2}:\d{2}\s*(?:am|pm))",
    re.IGNORECASE,
)
UNKNOWN_SUBURB = "Unknown"


def _location_name(soup: BeautifulSoup, slug: str) -> str:
    el = soup.find(class_="location-name")
    if el and el.get_text(strip=True):
        return el.get_text(strip=True)
    return slug.replace("_", " ")


def _address_and_point(soup: BeautifulSoup) -> tuple[str, float, float]:
    for anchor in soup.find_all("a", class_="address", href=True):
        lat, lng = extract_point_from_maps_href(anchor["href"])
        if lat is None or lng is None:
            continue
        return anchor.get_text(strip=True), lat, lng
    return "", 0.0, 0.0


def parse_list_page(html: str, slug: str) -> list[Shift]:
    soup = BeautifulSoup(html, "html.parser")
    service_name = _location_name(soup, slug)
    address, lat, lng = _address_and_point(soup)
    suburb = suburb_from_address(address)
    if suburb is None:
        suburb = UNKNOWN_SUBURB
    state = state_from_address(address)

    shifts: list[Shift] = []
    for el in soup.find_all(class_="shift-time"):
        match = SHIFT_TIME_RE.search(el.get_text(" ", strip=True))
        if not match:
            continue
        day, start, end = match.groups()
        shifts.append(
            Shift(
                service_name=service_name,
                suburb=suburb,
                state=state,
                address=address,
                lat=lat,
                lng=lng,
                day=day,
                start_time=convert_12h_to_24h(start),
                end_time=convert_12h_to_24h(end),
            )
        )
    return shifts
