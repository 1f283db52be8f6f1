from prometheus_client import Counter, Gauge

# Drive Cache Metrics
DRIVE_CACHE_EVENTS = Counter(
    'drive_cache_events_total',
    'Number of watch events applied to the drive cache',
    ['event_type', 'node_id']
)

DRIVE_CACHE_RELISTS = Counter(
    'drive_cache_relists_total',
    'Number of full drive listings applied to the drive cache',
    ['node_id']
)

DRIVE_CACHE_WATCH_ERRORS = Counter(
    'drive_cache_watch_errors_total',
    'Number of failed drive list or watch attempts',
    ['node_id']
)

DRIVE_CACHE_SYNCED = Gauge(
    'drive_cache_synced',
    'Whether the drive cache completed its initial sync (1) or not (0)',
    ['node_id']
)

DRIVE_CACHE_SIZE = Gauge(
    'drive_cache_size',
    'Number of drive records held in the drive cache',
    ['node_id']
)

# Validation Metrics
DRIVE_VALIDATION_MISMATCHES = Counter(
    'drive_validation_mismatches_total',
    'Number of drive validations failed, by check and field',
    ['check', 'field']
)

DRIVE_VALIDATION_TOLERATED = Counter(
    'drive_validation_tolerated_empty_total',
    'Number of field comparisons passed because udev reported an empty value',
    ['field']
)
