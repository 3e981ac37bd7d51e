from os.path import abspath, dirname, exists, join

from setuptools import setup

long_description = None
if exists("README.md"):
    with open("README.md") as file:
        long_description = file.read()

install_reqs = [
    req
    for req in open(abspath(join(dirname(__file__), "requirements.txt")))
    if req.strip() and not req.startswith("#")
]

# Try to use CFFI for building the C extension
# If CFFI is not available, the package will still work using the pure Python parser
try:
    from m3u8lite.cparser.build_ffi import ffibuilder
    cffi_modules = ["m3u8lite/cparser/build_ffi.py:ffibuilder"]
    setup_requires = ["cffi>=1.0.0"]
except ImportError:
    cffi_modules = []
    setup_requires = []

setup(
    name="m3u8lite",
    version="0.1.0",
    license="MIT",
    zip_safe=False,
    include_package_data=True,
    install_requires=install_reqs,
    setup_requires=setup_requires,
    extras_require={"test": ["pytest"]},
    cffi_modules=cffi_modules,
    packages=["m3u8lite", "m3u8lite.cparser"],
    package_data={
        "m3u8lite.cparser": ["*.c"],
    },
    description="HLS media playlist parser",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
)
