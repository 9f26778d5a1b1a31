"""Request bodies shared by the API tests."""

BEAN = {
    "name": "Yirgacheffe", "brand": "Onyx",
    "roast_level": "Light", "origin": "Ethiopia",
}
GRIND = {
    "grind_size": 8, "grind_time_seconds": 12.5, "grind_weight": 18.0,
    "grinder_type": "Niche Zero", "notes": "",
}
ESPRESSO_MACHINE = {
    "vendor": "Breville", "model": "Barista Express", "type": "EspressoMachine",
    "specifications": {"Pressure": "15 bar"},
}
