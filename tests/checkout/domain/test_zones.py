from checkout.shipping.zones import GOVERNORATES, is_valid_zone, zone_label, zone_label_en


def test_all_governorates_are_listed():
    assert len(GOVERNORATES) == 27
    assert len({zone.code for zone in GOVERNORATES}) == 27


def test_known_zone():
    assert is_valid_zone("cairo")
    assert zone_label_en("cairo") == "Cairo"
    assert zone_label("cairo") == "القاهرة"


def test_unknown_zone_labels_fall_back_to_code():
    assert not is_valid_zone("atlantis")
    assert zone_label("atlantis") == "atlantis"
    assert zone_label_en("atlantis") == "atlantis"
