"""
mboot_tool.py - Tool for unpacking and repacking Intel boot.img files for Android.

This tool provides two operations:
- `unpack` (-u): Splits a boot image into its segment files (hdr, sig, cmdline.txt,
  parameter, bootstub, kernel, ramdisk.cpio.gz) inside a working directory.
- `pack` (default): Reassembles those segment files into a boot image, recomputing
  the size fields, sector count and header checksum.

Several boundaries of the format are not self-describing (header presence, signature
size, bootstub size), so they are inferred from the byte content while unpacking.
"""

import struct
import os
import sys
import argparse
import mmap
import collections
from typing import List, Dict, Optional, Tuple, Union, BinaryIO

# --- Configuration Constants ---
# Default boot image file path.
DEFAULT_FILE_PATH = "boot.img"
# Default working directory for segment files.
DEFAULT_WORK_DIR = "./"
# Version number of the tool.
VERSION = "1.0.0"

# Optional leading header carrying device metadata, checksum and sector count.
HEADER_SIZE = 512
# Cumulative deltas probed for the end of an optional signature (0, 480, 728, 1024 bytes).
SIG_PROBE_DELTAS = (0, 480, 248, 296)
# Cmdline + image info (sizes, parameter) padded out to one 4096 byte block.
CMDLINE_SIZE = 1024
INFO_BLOCK_SIZE = 4096
PARAMETER_SIZE = 8
# Bootstub is one or two of these blocks.
BOOTSTUB_BLOCK_SIZE = 4096
SECTOR_SIZE = 512
TRAILING_PAD_BYTE = 0xFF

# Header fields recomputed on pack.
HEADER_CHECKSUM_OFFSET = 7
HEADER_CHECKSUM_SPAN = 56
HEADER_SECTORS_OFFSET = 48
HEADER_IMGTYPE_OFFSET = 52

# Written into the image info block of signed images.
SIGNED_MARKER = b"\xBD\x02\xBD\x02\xBD\x12\xBD\x12"
SIGNED_MARKER_OFFSET = CMDLINE_SIZE + 16

# Sanity bounds (inclusive) for the payload size fields.
KERNEL_SIZE_BOUNDS = (500000, 15000000)
RAMDISK_SIZE_BOUNDS = (10000, 300000000)

# Pre-compiled struct formats
# Little-endian size field.
U32_STRUCT = struct.Struct('<I')
# Image info: KernelSize(I), RamdiskSize(I), Parameter(8s)
IMAGE_INFO_STRUCT = struct.Struct('<II8s')

# Artifact names inside the working directory.
HDR_FILE = "hdr"
SIG_FILE = "sig"
CMDLINE_FILE = "cmdline.txt"
PARAMETER_FILE = "parameter"
BOOTSTUB_FILE = "bootstub"
KERNEL_FILE = "kernel"
RAMDISK_FILE = "ramdisk.cpio.gz"

# Emitted regions in stream order. A size of None means it is determined per image.
Segment = collections.namedtuple("Segment", ["name", "artifact", "size", "required"])
SEGMENT_CATALOG: List[Segment] = [
    Segment("header", HDR_FILE, HEADER_SIZE, False),
    Segment("signature", SIG_FILE, None, False),
    Segment("cmdline", CMDLINE_FILE, CMDLINE_SIZE, True),
    Segment("parameter", PARAMETER_FILE, PARAMETER_SIZE, True),
    Segment("bootstub", BOOTSTUB_FILE, None, True),
    Segment("kernel", KERNEL_FILE, None, True),
    Segment("ramdisk", RAMDISK_FILE, None, True),
]
REQUIRED_ARTIFACTS: List[str] = [seg.artifact for seg in SEGMENT_CATALOG if seg.required]

# ASCII alphanumerics, matching isalnum() in the C locale.
ALNUM_BYTES = frozenset(b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")

SplitLayout = collections.namedtuple(
    "SplitLayout",
    ["header_size", "sig_size", "bootstub_size", "kernel_size", "ramdisk_size", "cmdline"],
)

MbootConfig = collections.namedtuple(
    "MbootConfig", ["image_path", "work_dir", "unpack", "list_only", "debug"]
)


class MbootError(Exception):
    """Base class for boot image layout errors."""


class FormatError(MbootError, ValueError):
    """The image or a segment violates the boot image layout."""


class MissingSegmentError(MbootError, FileNotFoundError):
    """A required segment file is absent from the working directory."""


class InvalidWorkingDirectory(MbootError, NotADirectoryError):
    """The working directory does not exist or is not a directory."""


def decode_u32(buf: Union[bytes, bytearray, memoryview], offset: int = 0) -> int:
    """
    Decodes a little-endian unsigned 32-bit value at `offset`.

    Raises:
        FormatError: If fewer than 4 bytes are available at `offset`.
    """
    if offset < 0 or len(buf) - offset < U32_STRUCT.size:
        raise FormatError(
            f"Need {U32_STRUCT.size} bytes at offset {offset} to decode a size field, "
            f"buffer holds {len(buf)}."
        )
    return U32_STRUCT.unpack_from(buf, offset)[0]


def encode_u32(value: int) -> bytes:
    """
    Encodes `value` as a little-endian unsigned 32-bit field.
    """
    if not 0 <= value <= 0xFFFFFFFF:
        raise FormatError(f"Value {value} does not fit in a 32-bit size field.")
    return U32_STRUCT.pack(value)


def looks_textual(window: bytes, min_alnum: int) -> bool:
    """
    Guesses whether `window` looks like the start of a textual region rather than
    packed binary data.

    A single leading NUL is skipped (when the window is longer than one byte) since
    padded strings commonly start that way. The length of the run of ASCII
    alphanumerics that follows is compared against `min_alnum`.

    Args:
        window (bytes): The bytes to inspect. Never modified.
        min_alnum (int): The run must be strictly longer than this.

    Returns:
        bool: True if the window looks textual; False if it looks binary.
    """
    start: int = 1 if len(window) > 1 and window[0] == 0x00 else 0
    run: int = 0
    for byte in window[start:]:
        if byte not in ALNUM_BYTES:
            break
        run += 1
    return run > min_alnum


def padding_size(image_size: int) -> int:
    """
    Returns how many fill bytes bring `image_size` up to the next sector boundary.
    """
    return (SECTOR_SIZE - image_size % SECTOR_SIZE) % SECTOR_SIZE


def header_checksum(header: Union[bytes, bytearray]) -> int:
    """
    Computes the header XOR checksum over bytes [0, 56) with the checksum byte
    itself counted as zero.
    """
    if len(header) < HEADER_CHECKSUM_SPAN:
        raise FormatError(
            f"Header is {len(header)} bytes, at least {HEADER_CHECKSUM_SPAN} are needed for the checksum."
        )
    xor: int = 0
    for idx, byte in enumerate(header[:HEADER_CHECKSUM_SPAN]):
        if idx != HEADER_CHECKSUM_OFFSET:
            xor ^= byte
    return xor


def _check_bounds(name: str, value: int, bounds: Tuple[int, int]) -> None:
    low, high = bounds
    if value < low or value > high:
        raise FormatError(
            f"{name} size {value} is outside [{low}, {high}], the size field is likely wrong."
        )


class CliLogger:
    """
    Simple logger that keeps logging style consistent across commands and classes.
    """
    def __init__(self, debug: bool = False, quiet: bool = False):
        self._debug_enabled = debug
        self._quiet = quiet

    def info(self, message: str) -> None:
        if self._quiet:
            return
        add_prefix = self._debug_enabled and not message.startswith("[INFO]")
        prefix = "[INFO] " if add_prefix else ""
        print(f"{prefix}{message}")

    def warn(self, message: str) -> None:
        prefix = "[WARN]" if self._debug_enabled else "Warning:"
        print(f"{prefix} {message}", file=sys.stderr)

    def debug(self, message: str) -> None:
        if self._debug_enabled:
            print(f"[DEBUG] {message}")

    def error(self, message: str) -> None:
        print(f"Error: {message}", file=sys.stderr)


class ImageSplitter:
    """
    Splits a boot image into its segment files. Region boundaries that the format does
    not record (header, signature, bootstub) are inferred with `looks_textual`; the
    kernel and ramdisk sizes come from the image info block.
    """
    def __init__(self, output_dir: str, dry_run: bool = False, debug: bool = False, logger: Optional[CliLogger] = None):
        """
        Initializes an ImageSplitter instance.

        Args:
            output_dir (str): Directory the segment files are written to.
            dry_run (bool): If True, the layout is detected and reported but nothing is written.
        """
        self.output_dir: str = output_dir
        self.dry_run: bool = dry_run
        self.logger: CliLogger = logger or CliLogger(debug, quiet=not debug)
        self.data: Union[bytes, mmap.mmap] = b""
        self.pos: int = 0

    def _debug(self, message: str) -> None:
        self.logger.debug(message)

    def _info(self, message: str) -> None:
        self.logger.info(message)

    def _probe(self, offset: int, size: int, min_alnum: int) -> bool:
        window: bytes = bytes(self.data[offset:offset + size])
        result: bool = looks_textual(window, min_alnum)
        self._debug(f"Probe at 0x{offset:X} ({size} bytes, min {min_alnum}): {window!r} -> {'text' if result else 'binary'}")
        return result

    def _take(self, size: int) -> bytes:
        chunk: bytes = bytes(self.data[self.pos:self.pos + size])
        self.pos += size
        return chunk

    def write_file(self, name: str, data: bytes) -> None:
        """
        Writes one segment file into the output directory. No writing is performed in dry_run mode.
        """
        if self.dry_run:
            return
        full_path: str = os.path.join(self.output_dir, name)
        try:
            with open(full_path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise OSError(f"Failed to write segment file '{full_path}': {e}") from e
        self._debug(f"Wrote {len(data)} bytes to {full_path}")

    def _write_payload(self, name: str, artifact: str, size: int) -> None:
        available: int = max(0, len(self.data) - self.pos)
        if size > available:
            raise FormatError(
                f"{name} at 0x{self.pos:X} needs {size} bytes but only {available} remain, the image is truncated."
            )
        if self.dry_run:
            self.pos += size
            return
        self.write_file(artifact, self._take(size))

    def detect_header(self) -> int:
        """
        Consumes the header if the first bytes look like binary magic.

        Returns:
            int: The header size (HEADER_SIZE or 0).
        """
        if self._probe(self.pos, 4, 1):
            return 0
        self.write_file(HDR_FILE, self._take(HEADER_SIZE))
        return HEADER_SIZE

    def detect_signature(self) -> int:
        """
        Walks the signature probe deltas until the content looks textual again (the cmdline).
        When no probe matches, the signature spans all deltas.

        Returns:
            int: The signature size, 0 if there is none.
        """
        start: int = self.pos
        cursor: int = start
        for delta in SIG_PROBE_DELTAS:
            cursor += delta
            if self._probe(cursor, 4, 1):
                break
        sig_size: int = cursor - start
        if sig_size > 0:
            self.write_file(SIG_FILE, self._take(sig_size))
        return sig_size

    def read_image_info(self) -> Tuple[bytes, int, int]:
        """
        Reads the 4096 byte block holding the cmdline, kernel/ramdisk size fields and parameter.

        Returns:
            Tuple[bytes, int, int]: The cmdline (without NUL padding) and the two size field values.
        """
        block_start: int = self.pos
        raw_cmdline: bytes = self._take(CMDLINE_SIZE)
        cmdline: bytes = raw_cmdline.split(b"\x00", 1)[0]
        self.write_file(CMDLINE_FILE, cmdline)

        info: bytes = self._take(IMAGE_INFO_STRUCT.size)
        if len(info) < IMAGE_INFO_STRUCT.size:
            raise FormatError(
                f"Image ends at 0x{len(self.data):X}, before the image info at 0x{block_start + CMDLINE_SIZE:X}."
            )
        kernel_size, ramdisk_size, parameter = IMAGE_INFO_STRUCT.unpack(info)
        self.write_file(PARAMETER_FILE, parameter)

        # Rest of the block is padding.
        self.pos = block_start + INFO_BLOCK_SIZE
        return cmdline, kernel_size, ramdisk_size

    def detect_bootstub(self) -> int:
        """
        Consumes the bootstub, 8192 bytes if the content after the first 4096 bytes looks
        textual, otherwise 4096 bytes.
        """
        size: int = BOOTSTUB_BLOCK_SIZE
        if self._probe(self.pos + BOOTSTUB_BLOCK_SIZE, 2, 0):
            size += BOOTSTUB_BLOCK_SIZE
        self.write_file(BOOTSTUB_FILE, self._take(size))
        return size

    def split_buffer(self, data: Union[bytes, mmap.mmap]) -> SplitLayout:
        """
        Splits an in-memory boot image into segment files.

        Segment files written before a size check fails are left in place.

        Args:
            data (Union[bytes, mmap.mmap]): The whole image.

        Returns:
            SplitLayout: The sizes detected for every region.

        Raises:
            FormatError: If a size field is out of bounds or the image is truncated.
            OSError: If a segment file cannot be written.
        """
        self.data = data
        self.pos = 0
        if len(data) < HEADER_SIZE:
            raise FormatError(f"Image is {len(data)} bytes, too short to hold a boot image.")

        hdr_size: int = self.detect_header()
        self._info(f"header size   {hdr_size}")

        sig_size: int = self.detect_signature()
        self._info(f"sig size      {sig_size}")

        cmdline, kernel_size, ramdisk_size = self.read_image_info()
        self._debug(f"cmdline: {cmdline!r}")

        bootstub_size: int = self.detect_bootstub()
        self._info(f"bootstub size {bootstub_size}")

        _check_bounds("kernel", kernel_size, KERNEL_SIZE_BOUNDS)
        self._write_payload("kernel", KERNEL_FILE, kernel_size)
        self._info(f"kernel size   {kernel_size}")

        _check_bounds("ramdisk", ramdisk_size, RAMDISK_SIZE_BOUNDS)
        self._write_payload("ramdisk", RAMDISK_FILE, ramdisk_size)
        self._info(f"ramdisk size  {ramdisk_size}")

        trailing: int = len(self.data) - self.pos
        if trailing > 0:
            self._debug(f"Discarding {trailing} trailing bytes at 0x{self.pos:X}")

        return SplitLayout(hdr_size, sig_size, bootstub_size, kernel_size, ramdisk_size,
                           cmdline.decode("latin-1"))

    def split_file(self, file_path: str) -> SplitLayout:
        """
        Memory-maps `file_path` and splits it.
        """
        try:
            with open(file_path, "rb") as f:
                if os.fstat(f.fileno()).st_size == 0:
                    return self.split_buffer(b"")
                with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mm:
                    try:
                        return self.split_buffer(mm)
                    finally:
                        self.data = b""
        except FileNotFoundError as e:
            raise OSError(f"Cannot open input file '{file_path}': {e.strerror}") from e


class ImageAssembler:
    """
    Rebuilds a boot image from the segment files in a directory. The kernel/ramdisk size
    fields, signed marker, header image type, sector count and checksum are recomputed
    from the final layout rather than copied from the segment files.
    """
    def __init__(self, input_dir: str, debug: bool = False, logger: Optional[CliLogger] = None):
        """
        Initializes an ImageAssembler instance.

        Args:
            input_dir (str): Directory containing the segment files.
        """
        self.input_dir: str = input_dir
        self.logger: CliLogger = logger or CliLogger(debug, quiet=not debug)
        self.segments: Dict[str, Optional[bytes]] = {}

    def _debug(self, message: str) -> None:
        self.logger.debug(message)

    def _info(self, message: str) -> None:
        self.logger.info(message)

    def _read_segment_file(self, name: str) -> Optional[bytes]:
        """
        Reads a segment file from the input directory.

        Returns:
            Optional[bytes]: The file content, or None if the file does not exist.

        Raises:
            OSError: If the file exists but cannot be read.
        """
        full_path: str = os.path.join(self.input_dir, name)
        if not os.path.isfile(full_path):
            return None
        try:
            with open(full_path, "rb") as f:
                return f.read()
        except OSError as e:
            raise OSError(f"Failed to read segment file '{full_path}': {e}") from e

    def load_segments(self) -> None:
        """
        Loads the optional header/signature and the required segment files.

        Raises:
            MissingSegmentError: If a required segment file is absent.
            FormatError: If a segment does not fit its slot in the layout.
        """
        for name in (HDR_FILE, SIG_FILE):
            self.segments[name] = self._read_segment_file(name)
            if self.segments[name] is not None:
                self._debug(f"Loaded optional {name} ({len(self.segments[name])} bytes)")

        for name in REQUIRED_ARTIFACTS:
            data: Optional[bytes] = self._read_segment_file(name)
            if data is None:
                raise MissingSegmentError(
                    f"Required segment file '{os.path.join(self.input_dir, name)}' not found."
                )
            self.segments[name] = data
            self._debug(f"Loaded {name} ({len(data)} bytes)")

        hdr: Optional[bytes] = self.segments[HDR_FILE]
        if hdr is not None and len(hdr) < HEADER_CHECKSUM_SPAN:
            raise FormatError(
                f"Header is {len(hdr)} bytes, at least {HEADER_CHECKSUM_SPAN} are needed for its recomputed fields."
            )
        if len(self.segments[CMDLINE_FILE]) > CMDLINE_SIZE:
            raise FormatError(
                f"Cmdline is {len(self.segments[CMDLINE_FILE])} bytes, the limit is {CMDLINE_SIZE}."
            )
        if len(self.segments[PARAMETER_FILE]) > PARAMETER_SIZE:
            raise FormatError(
                f"Parameter is {len(self.segments[PARAMETER_FILE])} bytes, the limit is {PARAMETER_SIZE}."
            )

    def build(self) -> bytes:
        """
        Lays out the loaded segments into a complete image.

        Returns:
            bytes: The image, padded with 0xFF to a whole number of sectors.
        """
        hdr: Optional[bytes] = self.segments[HDR_FILE]
        sig: Optional[bytes] = self.segments[SIG_FILE]
        cmdline: bytes = self.segments[CMDLINE_FILE]
        parameter: bytes = self.segments[PARAMETER_FILE]
        bootstub: bytes = self.segments[BOOTSTUB_FILE]
        kernel: bytes = self.segments[KERNEL_FILE]
        ramdisk: bytes = self.segments[RAMDISK_FILE]

        hdr_size: int = len(hdr) if hdr is not None else 0
        sig_size: int = len(sig) if sig is not None else 0

        image_size: int = hdr_size + sig_size + INFO_BLOCK_SIZE + len(bootstub) + len(kernel) + len(ramdisk)
        pad_size: int = padding_size(image_size)
        self._debug(f"Image size {image_size}, padding {pad_size}")

        image: bytearray = bytearray(image_size + pad_size)

        if hdr is not None:
            image[0:hdr_size] = hdr

        info_offset: int = hdr_size + sig_size
        if sig is not None:
            image[hdr_size:info_offset] = sig
            marker_offset: int = info_offset + SIGNED_MARKER_OFFSET
            image[marker_offset:marker_offset + len(SIGNED_MARKER)] = SIGNED_MARKER
            self._debug(f"Signed marker written at 0x{marker_offset:X}")
        elif hdr is not None:
            # Unsigned image type is one above the signed one stored in the header.
            imgtype: int = decode_u32(image, HEADER_IMGTYPE_OFFSET)
            image[HEADER_IMGTYPE_OFFSET:HEADER_IMGTYPE_OFFSET + 4] = encode_u32((imgtype + 1) & 0xFFFFFFFF)
            self._debug(f"Header image type {imgtype} -> {imgtype + 1}")

        image[info_offset:info_offset + len(cmdline)] = cmdline
        info_fields: int = info_offset + CMDLINE_SIZE
        image[info_fields:info_fields + 8] = encode_u32(len(kernel)) + encode_u32(len(ramdisk))
        image[info_fields + 8:info_fields + 8 + len(parameter)] = parameter

        cursor: int = info_offset + INFO_BLOCK_SIZE
        for payload in (bootstub, kernel, ramdisk):
            image[cursor:cursor + len(payload)] = payload
            cursor += len(payload)

        image[image_size:] = bytes([TRAILING_PAD_BYTE]) * pad_size

        if hdr is not None:
            sectors: int = (image_size + pad_size) // SECTOR_SIZE - 1
            image[HEADER_SECTORS_OFFSET:HEADER_SECTORS_OFFSET + 4] = encode_u32(sectors)
            image[HEADER_CHECKSUM_OFFSET] = header_checksum(image)
            self._debug(f"Header sectors {sectors}, checksum 0x{image[HEADER_CHECKSUM_OFFSET]:02X}")

        return bytes(image)

    def assemble(self) -> bytes:
        self.load_segments()
        return self.build()


def split(input_stream: BinaryIO, out_dir: str, logger: Optional[CliLogger] = None) -> SplitLayout:
    """
    Splits the boot image read from `input_stream` into segment files in `out_dir`.
    """
    return ImageSplitter(out_dir, logger=logger).split_buffer(input_stream.read())


def assemble(in_dir: str, logger: Optional[CliLogger] = None) -> bytes:
    """
    Builds a boot image from the segment files in `in_dir` and returns its bytes.
    """
    return ImageAssembler(in_dir, logger=logger).assemble()


def write_image(path: str, data: bytes) -> None:
    """
    Writes the image atomically (write to temp -> rename) so a failure never leaves a
    truncated image at `path`.
    """
    temp_path: str = path + ".tmp"
    try:
        with open(temp_path, "wb") as f:
            f.write(data)
        os.replace(temp_path, path)
    except OSError as e:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise OSError(f"Cannot write output file '{path}': {e}") from e


def check_working_dir(path: str) -> None:
    """
    Raises InvalidWorkingDirectory unless `path` is an existing directory.
    """
    if not os.path.exists(path):
        raise InvalidWorkingDirectory(f"Cannot access '{path}': No such file or directory")
    if not os.path.isdir(path):
        raise InvalidWorkingDirectory(f"Cannot access '{path}': Is not a directory")


# --- Helper functions for dispatching modes ---
def run_unpack_mode(config: MbootConfig, logger: CliLogger) -> None:
    """
    Executes the 'unpack' mode, splitting the boot image into the working directory.
    With list_only set, the layout is reported and no segment files are written.
    """
    splitter: ImageSplitter = ImageSplitter(config.work_dir, dry_run=config.list_only, logger=logger)
    if config.list_only:
        logger.info(f"Listing segments of {config.image_path}...")
    layout: SplitLayout = splitter.split_file(config.image_path)
    if config.list_only:
        logger.info(f"cmdline       {layout.cmdline}")
        logger.info("Listing Complete.")
    else:
        logger.info(f"Unpacked {config.image_path} into {config.work_dir}")


def run_pack_mode(config: MbootConfig, logger: CliLogger) -> None:
    """
    Executes the default 'pack' mode, building the boot image from the working directory.
    """
    image: bytes = ImageAssembler(config.work_dir, logger=logger).assemble()
    write_image(config.image_path, image)
    logger.info(f"Packed {len(image)} bytes into {config.image_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mboot",
        description="Unpack an Intel boot image into separate files, OR,\n"
                    "pack a directory with kernel/ramdisk/bootstub into an Intel boot image.",
        formatter_class=argparse.RawTextHelpFormatter  # Allows multiline text and formatting in description.
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {VERSION}",
                        help="Show program's version number and exit.")
    parser.add_argument("-u", "--unpack", action="store_true",
                        help="split boot image into kernel, ramdisk, bootstub, etc.")
    parser.add_argument("-f", "--file", default=DEFAULT_FILE_PATH, metavar="FILE",
                        help=f"use FILE to unpack/repack (default: {DEFAULT_FILE_PATH})")
    parser.add_argument("-d", "--dir", default=DEFAULT_WORK_DIR, metavar="DIR",
                        help=f"use DIR to unpack/repack (default: {DEFAULT_WORK_DIR})")
    parser.add_argument("-l", "--list", action="store_true",
                        help="only report the segment layout of FILE, write nothing")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as e:
        # Usage errors exit with 1 like every other failure; --help and --version with 0.
        return 0 if e.code in (0, None) else 1
    config: MbootConfig = MbootConfig(
        image_path=args.file,
        work_dir=args.dir,
        unpack=args.unpack or args.list,
        list_only=args.list,
        debug=args.debug,
    )
    logger: CliLogger = CliLogger(config.debug)

    try:
        check_working_dir(config.work_dir)
        if config.unpack:
            run_unpack_mode(config, logger)
        else:
            run_pack_mode(config, logger)
    except MissingSegmentError as e:
        logger.error(f"{e}")
        return 1
    except FormatError as e:
        logger.error(f"{'Unpacking' if config.unpack else 'Packing'} error: {e}")
        return 1
    except InvalidWorkingDirectory as e:
        logger.error(f"{e}")
        return 1
    except OSError as e:
        logger.error(f"{e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
