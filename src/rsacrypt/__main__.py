"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the missing components of the CLI interaction, including the option that none are included.

Typical usage example:

    rsacrypt prime 1500
    rsacrypt keygen 1511 1709
    rsacrypt encrypt --exponent 3 --modulus 2582299 --file notes.txt
    OR
    python -m rsacrypt
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import pathlib
import sys
import typing

import rsacrypt
from rsacrypt.arith import word


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Callable = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in RSA Crypt.",
            choices=["prime", "keygen", "encrypt", "decrypt"],
        ),
    "prime":
        HelpData("Prime search utility."),
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("File encryption utility."),
    "decrypt":
        HelpData("File decryption utility."),
    "start":
        HelpData(
            description="Number from which to start looking for a prime.",
            format=word,
        ),
    "p":
        HelpData(
            description="First prime used in key generation.",
            format=word,
        ),
    "q":
        HelpData(
            description="Second prime used in key generation.",
            format=word,
        ),
    "exponent":
        HelpData(
            description="Key exponent, e to encrypt or d to decrypt.",
            format=word,
        ),
    "modulus":
        HelpData(
            description="Key modulus n.",
            format=word,
        ),
    "file":
        HelpData(
            description="Location of the file to transform in place.",
            format=pathlib.Path,
        ),
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
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
            advanced=True,
        )
}

needs = {
    "prime": ("start",),
    "keygen": ("p", "q"),
    "encrypt": ("exponent", "modulus", "file"),
    "decrypt": ("exponent", "modulus", "file"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public-key",
                    "-k",
                    dest="public_key",
                    type=help_dict["public_key"].format,
                    help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private-key",
                     "-K",
                     dest="private_key",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
numbers = argparse.ArgumentParser(add_help=False)
numbers.add_argument("--exponent", "-x", type=help_dict["exponent"].format, help=help_dict["exponent"].description)
numbers.add_argument("--modulus", "-m", type=help_dict["modulus"].format, help=help_dict["modulus"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--file", "-f", type=help_dict["file"].format, help=help_dict["file"].description)
corep = argparse.ArgumentParser(prog="rsacrypt")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsacrypt.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

prime = commands.add_parser("prime", help=help_dict["prime"].description)
prime.add_argument("start", nargs="?", type=help_dict["start"].format, help=help_dict["start"].description)

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("p", nargs="?", type=help_dict["p"].format, help=help_dict["p"].description)
keygen.add_argument("q", nargs="?", type=help_dict["q"].format, help=help_dict["q"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey, numbers, payloads], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey, numbers, payloads], help=help_dict["decrypt"].description)


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
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
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


def load_key(args: argparse.Namespace) -> rsacrypt.RSAPubKey | rsacrypt.RSAPrivKey | None:
    """Load the key file given for encryption or decryption, filling in the numbers it carries."""
    key = None
    if args.subcommand == "encrypt" and getattr(args, "public_key", None) is not None:
        key = rsacrypt.RSAPubKey.import_key(args.public_key)
    elif args.subcommand == "decrypt" and getattr(args, "private_key", None) is not None:
        key = rsacrypt.RSAPrivKey.import_key(args.private_key)
    if key is not None:
        args.exponent, args.modulus = key.expo, key.mod
    return key


def execute(args: argparse.Namespace, pstatus: tuple[bool, bool], pspr: typing.Callable) -> None:
    """Complete the arguments and run the chosen subcommand."""
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    key = load_key(args)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    match args.subcommand:
        case "prime":
            found = rsacrypt.find_next_prime(args.start, print)
            pspr("Prime:")
            print(found)
        case "keygen":
            rpk = rsacrypt.RSAPrivKey.generate(args.p, args.q)
            print(f"Public key:  e = {rpk.pub.expo}, n = {rpk.mod}")
            print(f"Private key: d = {rpk.expo}")
            dests = {"private": getattr(args, "private_key", None), "public": getattr(args, "public_key", None)}
            if all(dest is None for dest in dests.values()):
                return
            if any(dest is not None and dest.exists() for dest in dests.values()):
                rs = getattr(args, "overwrite", None)
                if rs is None:
                    rs = choice_handler("overwrite", pstatus, pspr)
                if rs == "N":
                    print("Destination private or public key already exists!")
                    return
            if dests["private"] is not None:
                rpk.export(dests["private"])
            if dests["public"] is not None:
                rpk.pub.export(dests["public"])
            pspr("\nKey files written!")
        case "encrypt":
            if key is None:
                key = rsacrypt.RSAPubKey(args.modulus, args.exponent)
            key.encrypt_file(args.file)
            pspr(f"\n{args.file} encrypted!")
        case "decrypt":
            if key is None:
                key = rsacrypt.RSAPrivKey(args.modulus, None, args.exponent)
            key.decrypt_file(args.file)
            pspr(f"\n{args.file} decrypted!")


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to RSA Crypt!\n")
    try:
        execute(args, pstatus, pspr)
    except (rsacrypt.RSACryptError, OSError, ValueError) as exc:
        print(f"Error: {exc}")
        sys.exit(1)
    pspr("Thank you for using RSA Crypt!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
