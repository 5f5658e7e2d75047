"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI: every option missing from the command line is asked for interactively, unless
`--non-interactive` is given, in which case defaults are used and anything without a default is an error.

Typical usage example:

    cryptkit keygen -P key.pem -p key.pub --keysize 2048
    cryptkit encrypt -p key.pub --message "Hi there!"
    python -m cryptkit aes-encrypt --key 3131... --iv 3132... --mode cbc --message "Hi there!"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import base64
import binascii
import logging
import pathlib
import sys
import typing

import cryptkit

logger = logging.getLogger("cryptkit")


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in cryptkit.",
            choices=["keygen", "encrypt", "decrypt", "aes-encrypt", "aes-decrypt"],
        ),
    "keygen":
        HelpData("RSA key pair generation."),
    "encrypt":
        HelpData("RSA PKCS#1 v1.5 encryption of payloads of any length."),
    "decrypt":
        HelpData("RSA PKCS#1 v1.5 decryption."),
    "aes-encrypt":
        HelpData("AES encryption."),
    "aes-decrypt":
        HelpData("AES decryption."),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
        ),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "encoding":
        HelpData(description="Payload encoding.", choices=["utf-8", "utf-16", "ascii"], advanced=True, default="utf-8"),
    "keysize":
        HelpData(
            description="Key size (in bits).",
            choices=["1024", "2048", "3072", "4096"],
            default="2048",
        ),
    "pub_exponent":
        HelpData(
            description="Exponent for the public key.",
            format=int,
            advanced=True,
            default=65537,
        ),
    "key":
        HelpData(
            description="AES key as hex, 16, 24 or 32 bytes long.",
            format=str,
        ),
    "iv":
        HelpData(
            description="AES IV as hex, 16 bytes long.",
            format=str,
        ),
    "mode":
        HelpData(
            description="AES mode of operation. CBC uses PKCS#7 padding.",
            choices=["cbc", "cfb", "ofb", "ctr"],
            default="cbc",
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("public_key", "private_key", "keysize", "pub_exponent"),
    "encrypt": ("public_key", "message", "encoding"),
    "decrypt": ("private_key", "message", "encoding"),
    "aes-encrypt": ("key", "iv", "mode", "message", "encoding"),
    "aes-decrypt": ("key", "iv", "mode", "message", "encoding"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
payloads.add_argument("--encoding", "-e", choices=help_dict["encoding"].choices, help=help_dict["encoding"].description)
aesp = argparse.ArgumentParser(add_help=False)
aesp.add_argument("--key", "-k", type=help_dict["key"].format, help=help_dict["key"].description)
aesp.add_argument("--iv", "-i", type=help_dict["iv"].format, help=help_dict["iv"].description)
aesp.add_argument("--mode", "-m", choices=help_dict["mode"].choices, help=help_dict["mode"].description)
corep = argparse.ArgumentParser(prog="cryptkit")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {cryptkit.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--debug", "-d", action="store_true", help="Log debug output to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--keysize", choices=help_dict["keysize"].choices, help=help_dict["keysize"].description)
keygen.add_argument("--pub-exponent", type=help_dict["pub_exponent"].format, help=help_dict["pub_exponent"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey, payloads], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey, payloads], help=help_dict["decrypt"].description)
aes_encrypt = commands.add_parser("aes-encrypt", parents=[aesp, payloads], help=help_dict["aes-encrypt"].description)
aes_decrypt = commands.add_parser("aes-decrypt", parents=[aesp, payloads], help=help_dict["aes-decrypt"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in helper_data.choices:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def check_message(mess: str, enc: str) -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        with open(mess[2:], "r", encoding=enc) as f:
            mess = f.read()
    return mess


def aes_cipher(args: argparse.Namespace, decrypting: bool):
    """Builds the AES object matching the parsed mode."""
    try:
        key, iv = bytes.fromhex(args.key), bytes.fromhex(args.iv)
    except ValueError as exc:
        raise cryptkit.ConfigError(f"Key and IV must be hexadecimal: {exc}") from exc
    match args.mode:
        case "cbc":
            padding = cryptkit.Pkcs7Padding(cryptkit.AES_BLOCK_SIZE)
            if decrypting:
                return cryptkit.new_cbc_decrypter(key, iv, padding)
            return cryptkit.new_cbc_encrypter(key, iv, padding)
        case "cfb":
            return cryptkit.new_cfb_decrypter(key, iv) if decrypting else cryptkit.new_cfb_encrypter(key, iv)
        case "ofb":
            return cryptkit.new_ofb(key, iv)
        case "ctr":
            return cryptkit.new_ctr(key, iv)
    raise ValueError(f"Unknown mode {args.mode}.")


def run(args: argparse.Namespace, pspr: typing.Callable) -> None:
    """Executes a fully populated subcommand."""
    match args.subcommand:
        case "keygen":
            rpk = cryptkit.RSAPrivKey.generate(int(args.keysize), args.pub_exponent)
            rpk.export(args.private_key)
            rpk.pub.export(args.public_key)
            pspr("\nKey pair generated!")
        case "encrypt":
            message = check_message(args.message, args.encoding)
            rpu = cryptkit.RSAPubKey.import_key(args.public_key)
            ciph = rpu.encrypt(message.encode(args.encoding))
            pspr("Ciphertext:")
            print(base64.b64encode(ciph).decode("ascii"))
        case "decrypt":
            message = check_message(args.message, "ascii")
            rpk = cryptkit.RSAPrivKey.import_key(args.private_key)
            clear = rpk.decrypt(base64.b64decode(message))
            pspr("Cleartext:")
            print(clear.decode(args.encoding))
        case "aes-encrypt":
            message = check_message(args.message, args.encoding).encode(args.encoding)
            cipher = aes_cipher(args, decrypting=False)
            ciph = cipher.encrypt(message) if args.mode == "cbc" else cipher.crypt(message)
            pspr("Ciphertext:")
            print(base64.b64encode(ciph).decode("ascii"))
        case "aes-decrypt":
            message = base64.b64decode(check_message(args.message, "ascii"))
            cipher = aes_cipher(args, decrypting=True)
            clear = cipher.decrypt(message) if args.mode == "cbc" else cipher.crypt(message)
            pspr("Cleartext:")
            print(clear.decode(args.encoding))


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to cryptkit!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus, pspr)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus, pspr)
            else:
                res = input_handler(reqs, pstatus, pspr)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    if args.subcommand == "keygen" and (args.private_key.exists() or args.public_key.exists()):
        rs = getattr(args, "overwrite", None)
        if rs is None:
            rs = choice_handler("overwrite", pstatus, pspr)
        if rs == "N":
            print("Destination private or public key already exists!")
            return
    pspr("\nInput Complete! Executing...")
    try:
        run(args, pspr)
    except (cryptkit.CryptError, UnicodeDecodeError, binascii.Error) as exc:
        logger.debug("%s failed", args.subcommand, exc_info=True)
        print(f"{args.subcommand} failed: {exc}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using cryptkit!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
