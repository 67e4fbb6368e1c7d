# Record signatures
LOCAL_FILE_HEADER_SIG = 0x04034B50    # "PK\x03\x04"
CENTRAL_DIR_SIG = 0x02014B50          # "PK\x01\x02"
END_OF_CENTRAL_DIR_SIG = 0x06054B50   # "PK\x05\x06"

# Version 2.0 covers the stored method; used for both made-by and needed
ZIP_VERSION = 20

METHOD_STORED = 0
FLAG_NONE = 0

# No timestamp semantics are attempted; MS-DOS time/date fields stay zero
DOS_TIME_ZERO = 0
DOS_DATE_ZERO = 0

# Fixed record sizes (excluding the variable-length name)
LOCAL_FILE_HEADER_SIZE = 30
CENTRAL_DIR_ENTRY_SIZE = 46
END_OF_CENTRAL_DIR_SIZE = 22

# Classic (non-ZIP64) field limits
MAX_U16 = 0xFFFF
MAX_U32 = 0xFFFFFFFF
MAX_ENTRIES = MAX_U16
MAX_NAME_BYTES = MAX_U16

DEFAULT_ENCODING = "utf-8"

ZIP_CONTENT_TYPE = "application/zip"
EML_CONTENT_TYPE = "application/octet-stream"

DEFAULT_ARCHIVE_PREFIX = "emails"
