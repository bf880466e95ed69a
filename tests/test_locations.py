# ABOUTME: Tests for the fixed city list and map-point resolution.
# ABOUTME: Validates lookups, the snapping tolerance, and custom location labels.

from weather_archive.locations import CUSTOM_LOCATION_NAME, JAPANESE_CITIES, find_city, location_for_point


class TestCityList:
    def test_prefectural_capitals(self):
        """The selector offers one city per prefecture with unique names.

        Implementation: Counts the list and checks name uniqueness.
        Passing implies: All 47 prefectures are selectable without ambiguity.
        """
        names = [city.name for city in JAPANESE_CITIES]
        assert len(names) == 47
        assert len(set(names)) == 47

    def test_find_city(self):
        tokyo = find_city("Tokyo")
        assert tokyo.label == "東京"
        assert find_city("Atlantis") is None


class TestLocationForPoint:
    def test_point_near_city_snaps(self):
        """A point within 0.1 degrees on both axes takes the city's name and label.

        Implementation: Offsets the Naha coordinate by 0.05 degrees.
        Passing implies: Dragging the marker near a city keeps its label.
        """
        location = location_for_point(26.26, 127.73)
        assert location.name == "Naha"
        assert location.coordinate.latitude == 26.26

    def test_point_at_tolerance_does_not_snap(self):
        """Exactly 0.1 degrees away is outside the tolerance.

        Implementation: Offsets Naha's latitude by a bit more than 0.1 degrees.
        Passing implies: The comparison is strict.
        """
        assert location_for_point(26.3125, 127.6809).name == CUSTOM_LOCATION_NAME

    def test_far_point_is_custom(self):
        """Points away from every city become a labelled custom location.

        Implementation: Picks a point on Mount Fuji.
        Passing implies: Arbitrary coordinates get a readable label.
        """
        location = location_for_point(35.3606, 138.7274)
        assert location.is_custom
        assert location.label == "指定地点 (35.36, 138.73)"
