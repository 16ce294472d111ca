"""Shipping zones: the Egyptian governorates vendors price against."""

from typing import NamedTuple


class Zone(NamedTuple):
    code: str
    label: str
    label_en: str


GOVERNORATES = (
    Zone("cairo", "القاهرة", "Cairo"),
    Zone("giza", "الجيزة", "Giza"),
    Zone("alexandria", "الإسكندرية", "Alexandria"),
    Zone("dakahlia", "الدقهلية", "Dakahlia"),
    Zone("sharqia", "الشرقية", "Sharqia"),
    Zone("qalyubia", "القليوبية", "Qalyubia"),
    Zone("monufia", "المنوفية", "Monufia"),
    Zone("gharbia", "الغربية", "Gharbia"),
    Zone("kafr_el_sheikh", "كفر الشيخ", "Kafr El Sheikh"),
    Zone("beheira", "البحيرة", "Beheira"),
    Zone("damietta", "دمياط", "Damietta"),
    Zone("port_said", "بورسعيد", "Port Said"),
    Zone("ismailia", "الإسماعيلية", "Ismailia"),
    Zone("suez", "السويس", "Suez"),
    Zone("north_sinai", "شمال سيناء", "North Sinai"),
    Zone("south_sinai", "جنوب سيناء", "South Sinai"),
    Zone("red_sea", "البحر الأحمر", "Red Sea"),
    Zone("fayoum", "الفيوم", "Fayoum"),
    Zone("beni_suef", "بني سويف", "Beni Suef"),
    Zone("minya", "المنيا", "Minya"),
    Zone("asyut", "أسيوط", "Asyut"),
    Zone("sohag", "سوهاج", "Sohag"),
    Zone("qena", "قنا", "Qena"),
    Zone("luxor", "الأقصر", "Luxor"),
    Zone("aswan", "أسوان", "Aswan"),
    Zone("new_valley", "الوادي الجديد", "New Valley"),
    Zone("matrouh", "مطروح", "Matrouh"),
)

_BY_CODE = {zone.code: zone for zone in GOVERNORATES}


def is_valid_zone(code: str) -> bool:
    return code in _BY_CODE


def zone_label(code: str) -> str:
    """Arabic display label, falling back to the raw code."""
    zone = _BY_CODE.get(code)
    return zone.label if zone else code


def zone_label_en(code: str) -> str:
    zone = _BY_CODE.get(code)
    return zone.label_en if zone else code
