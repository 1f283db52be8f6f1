"""
Configuration settings for the drive reconciler.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Node Configuration
NODE_ID = os.getenv('NODE_ID', 'default-node')
DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

# Device Paths
HOST_DEV_ROOT = os.getenv('HOST_DEV_ROOT', '/dev')
DIRECT_CSI_DEV_ROOT = os.getenv('DIRECT_CSI_DEV_ROOT', '/var/lib/direct-csi/devices')
DIRECT_CSI_PARTITION_INFIX = os.getenv('DIRECT_CSI_PARTITION_INFIX', '-part-')
HOST_PARTITION_INFIX = os.getenv('HOST_PARTITION_INFIX', '')

# Drive Custom Resource
DRIVE_GROUP = os.getenv('DRIVE_GROUP', 'direct.csi.min.io')
DRIVE_VERSION = os.getenv('DRIVE_VERSION', 'v1beta4')
DRIVE_PLURAL = os.getenv('DRIVE_PLURAL', 'directcsidrives')
NODE_LABEL_KEY = os.getenv('NODE_LABEL_KEY', 'direct.csi.min.io/node')

# Sync Configuration
RESYNC_PERIOD = float(os.getenv('RESYNC_PERIOD', '300'))  # 5 minutes default
WATCH_RETRY_DELAYS = [1, 5, 15]  # Backoff delays after a failed list/watch

# Metrics Configuration
METRICS_ENABLED = os.getenv('METRICS_ENABLED', 'True').lower() == 'true'

# Troubleshooting guide referenced when udev metadata is incomplete
TROUBLESHOOTING_URL = (
    'https://github.com/minio/directpv/blob/master/docs/troubleshooting.md#troubleshooting'
)
