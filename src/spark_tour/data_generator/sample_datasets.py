# Databricks notebook source

# MAGIC %md
# MAGIC # Sample Datasets
# MAGIC
# MAGIC Local (pandas) copies of the classic teaching datasets used in the walkthroughs.
# MAGIC
# MAGIC | Dataset | Source | Rows |
# MAGIC |---------|--------|------|
# MAGIC | `mtcars` | 1974 Motor Trend road tests (verbatim) | 32 |
# MAGIC | `iris` | Generated from the per-species means / std devs of Fisher's iris | 150 |
# MAGIC | `flights` | Generated, NYC 2013 departures (nycflights13 column set) | configurable |
# MAGIC | `batting` | Generated, Lahman-style season batting lines | configurable |
# MAGIC
# MAGIC Generated data is deterministic for a given seed.

# COMMAND ----------

import numpy as np
import pandas as pd

from spark_tour.config import tour_config

# COMMAND ----------

# MAGIC %md
# MAGIC ## mtcars

# COMMAND ----------

MTCARS_COLUMNS = ["mpg", "cyl", "disp", "hp", "drat", "wt", "qsec", "vs", "am", "gear", "carb"]

MTCARS_ROWS = [
    (21.0, 6, 160.0, 110, 3.90, 2.620, 16.46, 0, 1, 4, 4),   # Mazda RX4
    (21.0, 6, 160.0, 110, 3.90, 2.875, 17.02, 0, 1, 4, 4),   # Mazda RX4 Wag
    (22.8, 4, 108.0, 93, 3.85, 2.320, 18.61, 1, 1, 4, 1),    # Datsun 710
    (21.4, 6, 258.0, 110, 3.08, 3.215, 19.44, 1, 0, 3, 1),   # Hornet 4 Drive
    (18.7, 8, 360.0, 175, 3.15, 3.440, 17.02, 0, 0, 3, 2),   # Hornet Sportabout
    (18.1, 6, 225.0, 105, 2.76, 3.460, 20.22, 1, 0, 3, 1),   # Valiant
    (14.3, 8, 360.0, 245, 3.21, 3.570, 15.84, 0, 0, 3, 4),   # Duster 360
    (24.4, 4, 146.7, 62, 3.69, 3.190, 20.00, 1, 0, 4, 2),    # Merc 240D
    (22.8, 4, 140.8, 95, 3.92, 3.150, 22.90, 1, 0, 4, 2),    # Merc 230
    (19.2, 6, 167.6, 123, 3.92, 3.440, 18.30, 1, 0, 4, 4),   # Merc 280
    (17.8, 6, 167.6, 123, 3.92, 3.440, 18.90, 1, 0, 4, 4),   # Merc 280C
    (16.4, 8, 275.8, 180, 3.07, 4.070, 17.40, 0, 0, 3, 3),   # Merc 450SE
    (17.3, 8, 275.8, 180, 3.07, 3.730, 17.60, 0, 0, 3, 3),   # Merc 450SL
    (15.2, 8, 275.8, 180, 3.07, 3.780, 18.00, 0, 0, 3, 3),   # Merc 450SLC
    (10.4, 8, 472.0, 205, 2.93, 5.250, 17.98, 0, 0, 3, 4),   # Cadillac Fleetwood
    (10.4, 8, 460.0, 215, 3.00, 5.424, 17.82, 0, 0, 3, 4),   # Lincoln Continental
    (14.7, 8, 440.0, 230, 3.23, 5.345, 17.42, 0, 0, 3, 4),   # Chrysler Imperial
    (32.4, 4, 78.7, 66, 4.08, 2.200, 19.47, 1, 1, 4, 1),     # Fiat 128
    (30.4, 4, 75.7, 52, 4.93, 1.615, 18.52, 1, 1, 4, 2),     # Honda Civic
    (33.9, 4, 71.1, 65, 4.22, 1.835, 19.90, 1, 1, 4, 1),     # Toyota Corolla
    (21.5, 4, 120.1, 97, 3.70, 2.465, 20.01, 1, 0, 3, 1),    # Toyota Corona
    (15.5, 8, 318.0, 150, 2.76, 3.520, 16.87, 0, 0, 3, 2),   # Dodge Challenger
    (15.2, 8, 304.0, 150, 3.15, 3.435, 17.30, 0, 0, 3, 2),   # AMC Javelin
    (13.3, 8, 350.0, 245, 3.73, 3.840, 15.41, 0, 0, 3, 4),   # Camaro Z28
    (19.2, 8, 400.0, 175, 3.08, 3.845, 17.05, 0, 0, 3, 2),   # Pontiac Firebird
    (27.3, 4, 79.0, 66, 4.08, 1.935, 18.90, 1, 1, 4, 1),     # Fiat X1-9
    (26.0, 4, 120.3, 91, 4.43, 2.140, 16.70, 0, 1, 5, 2),    # Porsche 914-2
    (30.4, 4, 95.1, 113, 3.77, 1.513, 16.90, 1, 1, 5, 2),    # Lotus Europa
    (15.8, 8, 351.0, 264, 4.22, 3.170, 14.50, 0, 1, 5, 4),   # Ford Pantera L
    (19.7, 6, 145.0, 175, 3.62, 2.770, 15.50, 0, 1, 5, 6),   # Ferrari Dino
    (15.0, 8, 301.0, 335, 3.54, 3.570, 14.60, 0, 1, 5, 8),   # Maserati Bora
    (21.4, 4, 121.0, 109, 4.11, 2.780, 18.60, 1, 1, 4, 2),   # Volvo 142E
]


def mtcars() -> pd.DataFrame:
    return pd.DataFrame(MTCARS_ROWS, columns=MTCARS_COLUMNS)

# COMMAND ----------

# MAGIC %md
# MAGIC ## iris

# COMMAND ----------

# (mean, std) per measurement, from Fisher's published table
IRIS_PROFILES = {
    "setosa": [(5.006, 0.352), (3.428, 0.379), (1.462, 0.174), (0.246, 0.105)],
    "versicolor": [(5.936, 0.516), (2.770, 0.314), (4.260, 0.470), (1.326, 0.198)],
    "virginica": [(6.588, 0.636), (2.974, 0.322), (5.552, 0.552), (2.026, 0.275)],
}
IRIS_COLUMNS = ["Sepal_Length", "Sepal_Width", "Petal_Length", "Petal_Width"]


def iris(seed: int = tour_config.DATA_SEED, per_species: int = 50) -> pd.DataFrame:
    """Iris measurements, rounded to 0.1 cm like the original."""
    rng = np.random.default_rng(seed)
    frames = []
    for species, profile in IRIS_PROFILES.items():
        data = {
            col: np.clip(np.round(rng.normal(mean, std, per_species), 1), 0.1, None)
            for col, (mean, std) in zip(IRIS_COLUMNS, profile)
        }
        frame = pd.DataFrame(data)
        frame["Species"] = species
        frames.append(frame)
    return pd.concat(frames, ignore_index=True)

# COMMAND ----------

# MAGIC %md
# MAGIC ## flights
# MAGIC
# MAGIC One row per scheduled departure from EWR / JFK / LGA in 2013.
# MAGIC Cancelled flights (about 2%) have no `dep_time`, `dep_delay`, `arr_time` or `arr_delay`.

# COMMAND ----------

ROUTES = [
    ("EWR", "ORD", 719), ("JFK", "LAX", 2475), ("LGA", "ATL", 762),
    ("JFK", "SFO", 2586), ("LGA", "ORD", 733), ("EWR", "BOS", 200),
    ("JFK", "MCO", 944), ("LGA", "MIA", 1096), ("EWR", "IAH", 1400),
    ("JFK", "BOS", 187), ("LGA", "DCA", 214), ("EWR", "DEN", 1605),
    ("JFK", "SEA", 2422), ("LGA", "DTW", 502), ("EWR", "CLT", 529),
]
CARRIERS = ["UA", "AA", "DL", "B6", "EV", "WN", "US", "MQ"]
NUM_TAILNUMS = 150
CANCELLED_RATE = 0.02


def _to_hhmm(minutes):
    minutes = np.mod(minutes, 24 * 60)
    return (minutes // 60) * 100 + minutes % 60


def flights(n: int = tour_config.NUM_FLIGHTS,
            seed: int = tour_config.DATA_SEED) -> pd.DataFrame:
    rng = np.random.default_rng(seed)

    month = rng.integers(1, 13, n)
    day = rng.integers(1, 29, n)

    # Scheduled departures between 05:00 and 23:55 on a 5-minute grid
    sched_dep_min = rng.integers(5 * 12, 24 * 12, n) * 5
    sched_dep_time = _to_hhmm(sched_dep_min)

    # Most flights leave a little early or on time, a long tail leaves late
    late = rng.random(n) < 0.3
    dep_delay = np.where(
        late,
        np.round(rng.exponential(45.0, n)) + 1,
        np.round(rng.normal(-3.0, 5.0, n)),
    ).astype(float)

    route_idx = rng.integers(0, len(ROUTES), n)
    origin = np.array([ROUTES[i][0] for i in route_idx])
    dest = np.array([ROUTES[i][1] for i in route_idx])
    distance = np.array([ROUTES[i][2] for i in route_idx], dtype=float)

    air_time = np.round(distance / 8.0 + 20 + rng.normal(0, 6, n)).astype(float)
    arr_delay = np.round(dep_delay + rng.normal(-5.0, 12.0, n))
    sched_arr_min = sched_dep_min + air_time + 30

    cancelled = rng.random(n) < CANCELLED_RATE
    dep_delay[cancelled] = np.nan
    arr_delay[cancelled] = np.nan
    air_time[cancelled] = np.nan

    dep_time = np.where(cancelled, np.nan, _to_hhmm(sched_dep_min + np.nan_to_num(dep_delay)))
    arr_time = np.where(cancelled, np.nan, _to_hhmm(sched_arr_min + np.nan_to_num(arr_delay)))

    tailnums = np.array([f"N{100 + i}{'ABCDEFGHJK'[i % 10]}{'ABCDEFGHJK'[i // 10 % 10]}"
                         for i in range(NUM_TAILNUMS)])

    return pd.DataFrame({
        "year": np.full(n, 2013),
        "month": month,
        "day": day,
        "dep_time": dep_time,
        "sched_dep_time": sched_dep_time,
        "dep_delay": dep_delay,
        "arr_time": arr_time,
        "sched_arr_time": _to_hhmm(sched_arr_min.astype(int)),
        "arr_delay": arr_delay,
        "carrier": rng.choice(CARRIERS, n),
        "flight": rng.integers(1, 6000, n),
        "tailnum": rng.choice(tailnums, n),
        "origin": origin,
        "dest": dest,
        "air_time": air_time,
        "distance": distance,
        "hour": sched_dep_time // 100,
        "minute": sched_dep_time % 100,
    })

# COMMAND ----------

# MAGIC %md
# MAGIC ## batting
# MAGIC
# MAGIC One row per player, season and stint. Pitchers bat rarely, so some lines have `AB = 0` and `H = 0`.

# COMMAND ----------

FIRST_NAMES = ["hank", "babe", "willie", "mickey", "ted", "ken", "derek", "barry",
               "tony", "cal", "ichiro", "albert", "david", "mike", "jose"]
LAST_NAMES = ["aaron", "ruth", "mays", "mantle", "williams", "griffey", "jeter",
              "bonds", "gwynn", "ripken", "suzuki", "pujols", "ortiz", "trout", "canseco"]
TEAMS = [("NYA", "AL"), ("BOS", "AL"), ("OAK", "AL"), ("SEA", "AL"), ("DET", "AL"),
         ("ATL", "NL"), ("SFN", "NL"), ("LAN", "NL"), ("SLN", "NL"), ("CHN", "NL")]


def batting(n_players: int = tour_config.NUM_PLAYERS,
            seed: int = tour_config.DATA_SEED) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    rows = []

    for p in range(n_players):
        last = LAST_NAMES[p % len(LAST_NAMES)]
        first = FIRST_NAMES[(p // len(LAST_NAMES)) % len(FIRST_NAMES)]
        player_id = f"{last[:5]}{first[:2]}{p // (len(LAST_NAMES) * len(FIRST_NAMES)) + 1:02d}"

        is_pitcher = rng.random() < 0.3
        skill = rng.uniform(0.200, 0.320)
        first_year = int(rng.integers(1990, 2011))
        seasons = int(rng.integers(1, 13))
        team_idx = int(rng.integers(0, len(TEAMS)))

        for year in range(first_year, first_year + seasons):
            if rng.random() < 0.15:
                team_idx = int(rng.integers(0, len(TEAMS)))
            team, league = TEAMS[team_idx]

            games = int(rng.integers(20, 70) if is_pitcher else rng.integers(40, 163))
            at_bats = int(rng.integers(0, 8)) if is_pitcher else int(games * rng.uniform(2.5, 4.2))
            hits = int(rng.binomial(at_bats, 0.12 if is_pitcher else skill))
            doubles = int(rng.binomial(hits, 0.2))
            triples = int(rng.binomial(hits - doubles, 0.03))
            homers = int(rng.binomial(hits - doubles - triples, 0.12))

            rows.append({
                "playerID": player_id,
                "yearID": year,
                "stint": 1,
                "teamID": team,
                "lgID": league,
                "G": games,
                "AB": at_bats,
                "R": int(rng.binomial(hits + 1, 0.5)) if at_bats else 0,
                "H": hits,
                "X2B": doubles,
                "X3B": triples,
                "HR": homers,
                "RBI": int(rng.binomial(hits + homers, 0.45)),
                "SB": int(rng.poisson(3)) if not is_pitcher else 0,
                "BB": int(rng.binomial(at_bats, 0.08)),
                "SO": int(rng.binomial(at_bats, 0.18)),
            })

    return pd.DataFrame(rows)
