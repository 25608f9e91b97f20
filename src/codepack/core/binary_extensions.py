"""
File extensions treated as binary without reading any content.

Extensions are lower-case and have no leading dot.
"""

BINARY_EXTENSIONS: frozenset[str] = frozenset([
    # Images
    "png", "jpg", "jpeg", "gif", "bmp", "ico", "icns", "tif", "tiff", "webp",
    "avif", "heic", "heif", "psd", "xcf", "raw", "cr2", "nef", "dng", "jxl",
    # Audio
    "mp3", "wav", "flac", "aac", "ogg", "oga", "opus", "m4a", "wma", "aiff", "mid", "midi",
    # Video
    "mp4", "m4v", "mov", "avi", "mkv", "webm", "wmv", "flv", "mpg", "mpeg", "3gp",
    # Archives and compressed data
    "zip", "tar", "gz", "tgz", "bz2", "xz", "lz", "lz4", "lzma", "zst", "7z", "rar",
    "cab", "jar", "war", "ear", "apk", "aar", "whl", "egg", "deb", "rpm", "dmg", "iso",
    "img", "pkg", "msi", "snap",
    # Executables and libraries
    "exe", "dll", "so", "dylib", "a", "lib", "o", "obj", "ko", "elf", "bin", "out",
    "com", "app", "wasm", "node",
    # Bytecode and compiled artifacts
    "pyc", "pyo", "pyd", "class", "dex", "beam", "elc", "rlib", "pdb", "ilk", "idb",
    # Documents
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "ods", "odp", "rtf",
    "epub", "mobi", "pages", "numbers", "key",
    # Fonts
    "ttf", "otf", "woff", "woff2", "eot", "fon",
    # Databases and data blobs
    "db", "sqlite", "sqlite3", "mdb", "accdb", "dbf", "parquet", "avro", "orc",
    "feather", "arrow", "npy", "npz", "pkl", "pickle", "h5", "hdf5", "mat", "onnx",
    "pt", "pth", "ckpt", "safetensors", "tflite", "pb",
    # Design and 3D
    "blend", "fbx", "3ds", "max", "stl", "glb", "sketch", "fig", "ai", "eps",
    # Misc
    "swf", "dat", "sav", "keystore", "jks", "p12", "pfx", "der", "lockb",
])
