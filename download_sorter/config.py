"""
Configuration constants for the download sorter.
"""
# --- File Type Definitions ---
IMAGE_EXTS = {'.bmp', '.jpg', '.jpeg', '.png', '.gif'}
VIDEO_EXTS = {'.mp4', '.avi'}

# Extension to Type Mapping
# Anything missing from this table is classified as "other"
EXT_TO_TYPE = {}
for ext in IMAGE_EXTS: EXT_TO_TYPE[ext] = "image"
for ext in VIDEO_EXTS: EXT_TO_TYPE[ext] = "video"

# --- Metadata Parsing ---
DATE_TAGS = [
    'EXIF DateTimeOriginal',
    'EXIF DateTimeDigitized',
    'Image DateTime',
]

# --- Hashing ---
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading

# --- Classification ---
# Images at or below this many bits per pixel are treated as logos/drawings
LOGO_MAX_COLOR_DEPTH = 8
UNKNOWN_COLOR_DEPTH = -1

# --- Organization ---
LOGO_FOLDER = "logo"
VIDEO_FOLDER = "video"
NO_DATE_FOLDER = "nodate"
DAY_FOLDER_FORMAT = "%Y-%m-%d"

# A new day folder is only started once the current one holds this many files
MIN_FILES_PER_FOLDER = 10
# None = no upper cap; bursts on a single day stay in one folder
MAX_FILES_PER_FOLDER = None

LOG_FILE_NAME = "sorter.log"
