import datetime as dt
import random
import unittest

from ambient.domain import Holiday, SolarWindow, WeatherSnapshot
from ambient.photo_query import (
    HOLIDAY_TERM_POOLS,
    build_photo_query,
    compose_query_for_snapshot,
    compose_query_terms,
    holiday_terms,
)


class FirstKRng:
    """Deterministic stand-in: always picks the first k pool entries."""

    def sample(self, population, k):
        return list(population)[:k]


def _window(day: dt.date, sunrise: str = "07:30", sunset: str = "17:30") -> SolarWindow:
    return SolarWindow(
        sunrise=dt.datetime.fromisoformat(f"{day.isoformat()}T{sunrise}"),
        sunset=dt.datetime.fromisoformat(f"{day.isoformat()}T{sunset}"),
    )


WINTER_NOON = dt.datetime(2024, 2, 10, 12, 0)
CHRISTMAS_NIGHT = dt.datetime(2024, 12, 20, 23, 0)


class TestComposeQuery(unittest.TestCase):
    def test_winter_day_snow_suppresses_cloud_term(self):
        query = build_photo_query(
            WINTER_NOON,
            cloud_cover=80,
            rain=0,
            snowfall=5,
            solar_window=_window(WINTER_NOON.date()),
        )
        self.assertEqual(query, "winter snow")

    def test_christmas_night_with_deterministic_rng(self):
        query = build_photo_query(
            CHRISTMAS_NIGHT,
            cloud_cover=10,
            rain=0,
            snowfall=0,
            solar_window=_window(CHRISTMAS_NIGHT.date(), "08:45", "15:30"),
            rng=FirstKRng(),
        )
        self.assertEqual(query, "christmas decorated tree night")

    def test_christmas_night_terms_shape(self):
        pool = HOLIDAY_TERM_POOLS[Holiday.CHRISTMAS]
        terms = compose_query_terms(
            CHRISTMAS_NIGHT,
            cloud_cover=10,
            rain=0,
            snowfall=0,
            solar_window=_window(CHRISTMAS_NIGHT.date(), "08:45", "15:30"),
            rng=random.Random(7),
        )
        self.assertEqual(len(terms), 4)
        self.assertEqual(terms[0], "christmas")
        self.assertIn(terms[1], pool)
        self.assertIn(terms[2], pool)
        self.assertNotEqual(terms[1], terms[2])
        self.assertEqual(terms[3], "night")

    def test_holiday_extras_vary_across_seeds(self):
        combos = set()
        for seed in range(100):
            terms = compose_query_terms(CHRISTMAS_NIGHT, rng=random.Random(seed))
            combos.add(tuple(terms[1:3]))
        self.assertGreaterEqual(len(combos), 2)

    def test_same_seed_same_query(self):
        a = build_photo_query(CHRISTMAS_NIGHT, rng=random.Random(42))
        b = build_photo_query(CHRISTMAS_NIGHT, rng=random.Random(42))
        self.assertEqual(a, b)

    def test_new_year_uses_spaced_holiday_name(self):
        terms = compose_query_terms(dt.datetime(2024, 12, 31, 23, 0), rng=FirstKRng())
        self.assertEqual(terms[:3], ["new year", "fireworks", "celebration"])

    def test_season_has_no_extra_terms(self):
        terms = compose_query_terms(
            dt.datetime(2024, 7, 14, 12, 0),
            solar_window=_window(dt.date(2024, 7, 14), "05:00", "21:30"),
        )
        self.assertEqual(terms, ["summer"])

    def test_dawn_and_dusk_terms(self):
        window = _window(dt.date(2024, 7, 14), "05:00", "21:30")
        dawn = compose_query_terms(dt.datetime(2024, 7, 14, 5, 15), solar_window=window)
        dusk = compose_query_terms(dt.datetime(2024, 7, 14, 21, 0), solar_window=window)
        self.assertEqual(dawn, ["summer", "dawn"])
        self.assertEqual(dusk, ["summer", "dusk"])

    def test_missing_solar_window_adds_night(self):
        self.assertEqual(compose_query_terms(dt.datetime(2024, 7, 14, 12, 0)), ["summer", "night"])

    def test_snow_beats_rain(self):
        terms = compose_query_terms(WINTER_NOON, rain=3, snowfall=1, solar_window=_window(WINTER_NOON.date()))
        self.assertEqual(terms, ["winter", "snow"])

    def test_rain_suppresses_cloud_term(self):
        terms = compose_query_terms(WINTER_NOON, cloud_cover=95, rain=0.2, snowfall=0,
                                    solar_window=_window(WINTER_NOON.date()))
        self.assertEqual(terms, ["winter", "rain"])

    def test_cloud_threshold_is_inclusive(self):
        window = _window(WINTER_NOON.date())
        at = compose_query_terms(WINTER_NOON, cloud_cover=70, rain=0, snowfall=0, solar_window=window)
        below = compose_query_terms(WINTER_NOON, cloud_cover=69, rain=0, snowfall=0, solar_window=window)
        self.assertEqual(at, ["winter", "cloudy"])
        self.assertEqual(below, ["winter"])

    def test_none_weather_fields_mean_no_precipitation(self):
        terms = compose_query_terms(WINTER_NOON, cloud_cover=None, rain=None, snowfall=None,
                                    solar_window=_window(WINTER_NOON.date()))
        self.assertEqual(terms, ["winter"])


class TestHolidayPools(unittest.TestCase):
    def test_every_holiday_has_a_curated_pool(self):
        for holiday in Holiday:
            pool = HOLIDAY_TERM_POOLS[holiday]
            self.assertTrue(8 <= len(pool) <= 10, msg=holiday)
            self.assertEqual(len(set(pool)), len(pool))
            self.assertTrue(all(term == term.lower() for term in pool))

    def test_holiday_terms_are_distinct(self):
        for seed in range(20):
            terms = holiday_terms(Holiday.EASTER, random.Random(seed))
            self.assertEqual(terms[0], "easter")
            self.assertEqual(len(set(terms[1:])), 2)


def test_compose_query_for_snapshot_reads_weather_fields():
    weather = WeatherSnapshot(
        cloud_cover=85,
        rain=0,
        snowfall=0,
        sunrise="2024-02-10T07:30",
        sunset="2024-02-10T17:30",
        timezone="UTC",
    )
    assert compose_query_for_snapshot(WINTER_NOON, weather) == "winter cloudy"


def test_compose_query_for_snapshot_without_weather():
    assert compose_query_for_snapshot(WINTER_NOON, None) == "winter night"


if __name__ == "__main__":
    unittest.main()
