# ABOUTME: The fixed list of selectable Japanese cities (prefectural capitals, north to south).
# ABOUTME: Also resolves map-picked points to a known city or a labelled custom location.

from weather_archive.models import CUSTOM_LOCATION_NAME, Coordinate, Location

# Map clicks within this many degrees of a city (on both axes) select that city
SNAP_TOLERANCE_DEGREES = 0.1

_CITIES = [
    ("Sapporo", "札幌 (北海道)", 43.0642, 141.3469),
    ("Aomori", "青森", 40.8244, 140.7400),
    ("Morioka", "盛岡 (岩手)", 39.7036, 141.1527),
    ("Sendai", "仙台 (宮城)", 38.2688, 140.8721),
    ("Akita", "秋田", 39.7186, 140.1024),
    ("Yamagata", "山形", 38.2404, 140.3633),
    ("Fukushima", "福島", 37.7503, 140.4676),
    ("Mito", "水戸 (茨城)", 36.3418, 140.4468),
    ("Utsunomiya", "宇都宮 (栃木)", 36.5657, 139.8836),
    ("Maebashi", "前橋 (群馬)", 36.3912, 139.0609),
    ("Saitama", "さいたま (埼玉)", 35.8617, 139.6455),
    ("Chiba", "千葉", 35.6074, 140.1065),
    ("Tokyo", "東京", 35.6895, 139.6917),
    ("Yokohama", "横浜 (神奈川)", 35.4478, 139.6425),
    ("Niigata", "新潟", 37.9026, 139.0232),
    ("Toyama", "富山", 36.6953, 137.2113),
    ("Kanazawa", "金沢 (石川)", 36.5947, 136.6256),
    ("Fukui", "福井", 36.0652, 136.2216),
    ("Kofu", "甲府 (山梨)", 35.6642, 138.5684),
    ("Nagano", "長野", 36.6513, 138.1810),
    ("Gifu", "岐阜", 35.3912, 136.7223),
    ("Shizuoka", "静岡", 34.9769, 138.3831),
    ("Nagoya", "名古屋 (愛知)", 35.1815, 136.9066),
    ("Tsu", "津 (三重)", 34.7303, 136.5086),
    ("Otsu", "大津 (滋賀)", 35.0045, 135.8686),
    ("Kyoto", "京都", 35.0116, 135.7681),
    ("Osaka", "大阪", 34.6937, 135.5023),
    ("Kobe", "神戸 (兵庫)", 34.6901, 135.1956),
    ("Nara", "奈良", 34.6851, 135.8048),
    ("Wakayama", "和歌山", 34.2261, 135.1675),
    ("Tottori", "鳥取", 35.5011, 134.2351),
    ("Matsue", "松江 (島根)", 35.4723, 133.0505),
    ("Okayama", "岡山", 34.6551, 133.9195),
    ("Hiroshima", "広島", 34.3853, 132.4553),
    ("Yamaguchi", "山口", 34.1859, 131.4714),
    ("Tokushima", "徳島", 34.0658, 134.5593),
    ("Takamatsu", "高松 (香川)", 34.3401, 134.0434),
    ("Matsuyama", "松山 (愛媛)", 33.8392, 132.7657),
    ("Kochi", "高知", 33.5597, 133.5311),
    ("Fukuoka", "福岡", 33.5904, 130.4017),
    ("Saga", "佐賀", 33.2494, 130.2988),
    ("Nagasaki", "長崎", 32.7503, 129.8777),
    ("Kumamoto", "熊本", 32.8032, 130.7079),
    ("Oita", "大分", 33.2382, 131.6126),
    ("Miyazaki", "宮崎", 31.9111, 131.4239),
    ("Kagoshima", "鹿児島", 31.5966, 130.5571),
    ("Naha", "那覇 (沖縄)", 26.2124, 127.6809),
]

JAPANESE_CITIES: list[Location] = [
    Location(name=name, label=label, coordinate=Coordinate(latitude=lat, longitude=lng))
    for name, label, lat, lng in _CITIES
]


def find_city(name: str) -> Location | None:
    """Look up a fixed city by its romanised name."""
    for city in JAPANESE_CITIES:
        if city.name == name:
            return city
    return None


def location_for_point(latitude: float, longitude: float) -> Location:
    """Resolve a map-picked point to a city within snapping distance, or a custom location.

    The returned location always carries the picked coordinate, so the query
    point is exactly where the user clicked even when a city label is shown.
    """
    coordinate = Coordinate(latitude=latitude, longitude=longitude)
    for city in JAPANESE_CITIES:
        if (
            abs(city.coordinate.latitude - latitude) < SNAP_TOLERANCE_DEGREES
            and abs(city.coordinate.longitude - longitude) < SNAP_TOLERANCE_DEGREES
        ):
            return Location(name=city.name, label=city.label, coordinate=coordinate)
    return Location(
        name=CUSTOM_LOCATION_NAME,
        label=f"指定地点 ({latitude:.2f}, {longitude:.2f})",
        coordinate=coordinate,
    )
