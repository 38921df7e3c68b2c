"""Pipeline constants and configuration data"""

import datetime as dt

# Source CSV exported by the weather station
DEFAULT_CSV_URL = (
    "https://hebbkx1anhila5yf.public.blob.vercel-storage.com/"
    "ML-417ADS_125416523_3-FsSETybgez6hFyBBY5nnjA1Ex50wn6.csv"
)

# Cache layout
CACHE_DATA_KEY = "timeSeriesData"
CACHE_TIMESTAMP_KEY = "timeSeriesDataTimestamp"
CACHE_TTL = dt.timedelta(hours=1)

# Offline artifact
ARTIFACT_DIR = "public/data"
ARTIFACT_DATA_FILE = "time-series-data.json"
ARTIFACT_METADATA_FILE = "time-series-metadata.json"

# Number of leading rows inspected when sampling value kinds
SAMPLE_ROWS = 10

# Column name fragments
TIME_NAME_TOKENS = ("time", "date", "timestamp")
NON_MEASUREMENT_TOKENS = ("time", "date", "name", "id")

# Station measurement fields that are always numeric
WEATHER_FIELDS = (
    "solar",
    "precipitation",
    "strikes",
    "strikeDistance",
    "windSpeed",
    "windDirection",
    "gustWindSpeed",
    "airTemperature",
    "Vapor pressure",
    "atmosphericPressure",
    "R.Humidity",
    "sensorTemp",
    "X orintation",
    "Y orintation",
    "compassHeading",
)

# Field name fragment -> display unit, first match wins
FIELD_UNITS = (
    ("temp", "°C"),
    ("solar", "W/m²"),
    ("precipitation", "mm"),
    ("distance", "km"),
    ("wind", "m/s"),          # wind speeds; directions are caught below
    ("direction", "°"),
    ("heading", "°"),
    ("orintation", "°"),
    ("pressure", "hPa"),
    ("humidity", "%"),
)

# Value ranges (low, high) for synthetic sample data
SAMPLE_RANGES = {
    "solar": (0.0, 1000.0),              # W/m²
    "precipitation": (0.0, 10.0),        # mm
    "strikes": (0, 5),                   # count
    "strikeDistance": (0.0, 20.0),       # km
    "windSpeed": (0.0, 15.0),            # m/s
    "windDirection": (0.0, 360.0),       # degrees
    "gustWindSpeed": (0.0, 25.0),        # m/s
    "airTemperature": (15.0, 30.0),      # °C
    "Vapor pressure": (0.0, 3.0),        # kPa
    "atmosphericPressure": (990.0, 1030.0),  # hPa
    "R.Humidity": (30.0, 100.0),         # %
    "sensorTemp": (10.0, 30.0),          # °C
    "X orintation": (-10.0, 10.0),       # degrees
    "Y orintation": (-10.0, 10.0),       # degrees
    "compassHeading": (0.0, 360.0),      # degrees
}
DEFAULT_SAMPLE_RANGE = (0.0, 100.0)

# Column kind -> metadata type tag
TYPE_TAGS = {
    'numeric': 'number',
    'temporal': 'date',
    'text': 'string',
}

# Stat cards
MAX_SUMMARY_COLUMNS = 4
ROWS_PER_PAGE = 10
