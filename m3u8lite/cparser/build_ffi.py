"""
CFFI builder script for the m3u8lite C scanner.

This script compiles the C scanner and generates Python bindings using CFFI.
Run this script to build the extension:

    python -m m3u8lite.cparser.build_ffi

Or it will be automatically built by setup.py during installation.
"""

from pathlib import Path

from cffi import FFI

ffibuilder = FFI()

HERE = Path(__file__).parent.resolve()

c_source = (HERE / "hls_scanner.c").read_text()

# Must stay in sync with the struct definitions in hls_scanner.c
ffibuilder.cdef(
    """
    /* Media segment, in manifest order */
    typedef struct HLSSegment {
        double duration;
        char *url;
        size_t url_len;
        int discontinuity;
        struct HLSSegment *next;
    } HLSSegment;

    /* Tolerated malformed tag payload */
    typedef struct HLSDiagnostic {
        size_t lineno;
        int kind;
        char *line;
        size_t line_len;
        struct HLSDiagnostic *next;
    } HLSDiagnostic;

    /* Root data structure */
    typedef struct HLSData {
        int error;
        int ended;
        int has_version;
        unsigned long long version;
        unsigned long long target_duration;

        HLSSegment *segments_head;
        HLSSegment *segments_tail;

        HLSDiagnostic *diagnostics_head;
        HLSDiagnostic *diagnostics_tail;
    } HLSData;

    /* Public API */
    HLSData* hls_parse(const char *content, size_t length);
    void hls_free(HLSData *data);
    """
)

ffibuilder.set_source(
    "m3u8lite._hls_cparser",
    c_source,
    include_dirs=[str(HERE)],
)

if __name__ == "__main__":
    ffibuilder.compile(verbose=True)
