#!/usr/bin/env python3
# -*- coding: UTF-8 -*-

"""
Main module for bfstream command line utility.
"""
from bfstream import cry, stream
from bfstream import BfStreamException, KeyRequired
from bfstream.config import enc
import argcomplete
import argparse
import bfstream
import contextlib
import logging
import signal
import sys

def __signal_handler(signal, frame):
    """Handle keyboard interrupt."""
    sys.stderr.write("KeyboardInterrupt captured. Stopping bfstream.\n")
    logging.info('KeyboardInterrupt received.')
    sys.exit(130)

def __check_chunk_size(chunk_size):
    """Raise ValueError if chunk size is not multiple of cipher block size."""
    chunk_size = int(chunk_size)
    if chunk_size <= 0 or chunk_size % enc.block_size:
        raise ValueError(
            "Chunk size should be multiple of {}.".format(enc.block_size))
    return chunk_size

def __parse_args(argv=None):
    """Parse command line arguments and return an argparse object."""
    parser = argparse.ArgumentParser(
        prog = "bfstream",
        description="Blowfish encryption / decryption of files and pipes."
        )
    parser.add_argument(
        "-v", "--version", action="store_true",
        help="Show version info and exit.")
    parser.add_argument(
        "-d", "--debug", action="store_true",
        help="Enable debug output in the log (stderr).")
    parser.add_argument(
        "operation", type=str, action="store", nargs="?",
        choices=('encrypt','decrypt'),
        help="Choose encrypt or decrypt.")
    key_group = parser.add_mutually_exclusive_group()
    key_group.add_argument(
        "-k", "--key", type=str, action="store",
        help="Specify inline key value.")
    key_group.add_argument(
        "-f", "--keyfile", type=str, action="store",
        help="Read key from the specified file.")
    parser.add_argument(
        "-i", "--infile", type=str, action="store",
        help="File to read from. Defaults to stdin.")
    parser.add_argument(
        "-o", "--outfile", type=str, action="store",
        help="File to write to. Defaults to stdout.")
    parser.add_argument(
        "--chunk-size", type=__check_chunk_size, action="store",
        help="Set read chunk size. Has to be multiple of {}.".format(
            enc.block_size))
    parser.set_defaults(
        key = None,
        keyfile = None,
        infile = None,
        outfile = None,
        chunk_size = enc.default_chunk_size,
    )

    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)
    if not args.version and not args.operation:
        parser.error("the following arguments are required: operation")
    return args

def get_cry(args):
    """Generate and return Cry object from command line arguments."""
    if args.key:
        return cry.get_key_cry(args.key)
    elif args.keyfile:
        return cry.get_keyfile_cry(args.keyfile)
    raise KeyRequired("Either key or keyfile must be specified.")

def run(args):
    """Run the selected operation, opening files in place of stdio."""
    crypto = get_cry(args)
    with contextlib.ExitStack() as stack:
        stdin = sys.stdin.buffer
        stdout = sys.stdout.buffer
        if args.infile:
            stdin = stack.enter_context(open(args.infile, 'rb'))
        if args.outfile:
            stdout = stack.enter_context(open(args.outfile, 'wb'))
        if args.operation == 'encrypt':
            total = stream.encrypt(crypto, stdin, stdout, args.chunk_size)
        else:
            total = stream.decrypt(crypto, stdin, stdout, args.chunk_size)
    logging.info("%sed %d bytes from '%s' to '%s'.",
        args.operation.capitalize(),
        total,
        args.infile or '<stdin>',
        args.outfile or '<stdout>',
        )
    return total

def main(argv=None):
    """Main method of command line utility."""
    args = __parse_args(argv)
    signal.signal(signal.SIGINT, __signal_handler)
    if args.version:
        print("bfstream {} - Copyright {} {} <{}>".format(
            bfstream.__version__,
            bfstream.__year__,
            bfstream.__author__,
            bfstream.__author_email__,
            ))
        sys.exit(0)
    logging.basicConfig(
        format = '%(asctime)s.%(msecs)03d, %(levelname)s: %(message)s',
        datefmt = '%Y-%m-%d %H:%M:%S',
        stream = sys.stderr,
        level = logging.DEBUG if args.debug else logging.WARNING,
        )
    try:
        run(args)
    except (BfStreamException, OSError) as e:
        sys.stderr.write(str(e)+"\n")
        logging.warning("%s failed: %s", args.operation, e)
        sys.exit(1)

if __name__ == '__main__':
    main()
