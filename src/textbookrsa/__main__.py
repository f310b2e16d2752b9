"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that prompts on-the-fly for whatever
the command line left out, including the subcommand itself. With `--non-interactive` defaults are used instead and
anything without a default is an error.

Typical usage example:

    textbookrsa demo --bits 16 --rounds 10
    OR
    python -m textbookrsa keygen --bits 32 --seed 7
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import random
import sys
import typing

import textbookrsa


def integer(text: str) -> int:
    """Parses decimal or 0x-prefixed hexadecimal integers."""
    return int(text, 0)


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Callable = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in textbook RSA.",
            choices=["keygen", "encrypt", "decrypt", "demo"],
        ),
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "demo":
        HelpData("Generate a key pair and round-trip random messages through it."),
    "bits":
        HelpData(
            description="Bit length of each of the two primes.",
            format=integer,
            default=16,
        ),
    "modulus":
        HelpData(
            description="Key modulus n (decimal or 0x-hex).",
            format=integer,
        ),
    "exponent":
        HelpData(
            description="Key exponent, e to encrypt or d to decrypt (decimal or 0x-hex).",
            format=integer,
        ),
    "message":
        HelpData(
            description="Message or ciphertext representative, in range [0, n) (decimal or 0x-hex).",
            format=integer,
        ),
    "rounds":
        HelpData(
            description="Number of random messages to round-trip.",
            format=integer,
            advanced=True,
            default=10,
        ),
}

needs = {
    "keygen": ("bits",),
    "encrypt": ("modulus", "exponent", "message"),
    "decrypt": ("modulus", "exponent", "message"),
    "demo": ("bits", "rounds"),
}

keyparts = argparse.ArgumentParser(add_help=False)
keyparts.add_argument("--modulus", "-N", type=integer, help=help_dict["modulus"].description)
keyparts.add_argument("--exponent", "-E", type=integer, help=help_dict["exponent"].description)
keyparts.add_argument("--message", "-m", type=integer, help=help_dict["message"].description)
sizes = argparse.ArgumentParser(add_help=False)
sizes.add_argument("--bits", "-b", type=integer, help=help_dict["bits"].description)
sizes.add_argument("--seed", type=integer, help="Seed for a reproducible random source.")
corep = argparse.ArgumentParser(prog="textbookrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {textbookrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--log-level",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   default="WARNING",
                   help="Logging verbosity.")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

commands.add_parser("keygen", parents=[sizes], help=help_dict["keygen"].description)
commands.add_parser("encrypt", parents=[keyparts], help=help_dict["encrypt"].description)
commands.add_parser("decrypt", parents=[keyparts], help=help_dict["decrypt"].description)
demo = commands.add_parser("demo", parents=[sizes], help=help_dict["demo"].description)
demo.add_argument("--rounds", "-r", type=integer, help=help_dict["rounds"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
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
    vald = set(helper_data.choices)
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


def run_demo(bits: int, rounds: int, rng: random.Random | None = None) -> bool:
    """Generate one key pair and round-trip `rounds` random messages, reporting each in hex.

    Returns:
        True if every message decrypted back to itself.
    """
    rng = textbookrsa.numtheory.random_source(rng)
    pub, priv = textbookrsa.generate_keys(bits, rng)
    print("----- System Parameters -----")
    print(f"Key size: {bits}\n")
    print("----- Keys -----")
    print(f"Public  Key: (n: {pub.modulus:#x}, e: {pub.exponent:#x})")
    print(f"Private Key: (n: {priv.modulus:#x}, d: {priv.exponent:#x})\n")
    print("----- Messages -----")
    success = True
    for i in range(rounds):
        message = rng.randint(0, pub.modulus - 1)
        ciphertext = textbookrsa.encrypt(message, pub)
        decrypted = textbookrsa.decrypt(ciphertext, priv)
        print(f"# {i}")
        print(f"Plain     text: {message:#x}")
        print(f"Encrypted text: {ciphertext:#x}")
        print(f"Decrypted text: {decrypted:#x}")
        if message == decrypted:
            print("Decryption    : Success.\n")
        else:
            print("Decryption    : Failed.\n")
            success = False
    return success


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to textbook RSA!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
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
    seed = getattr(args, "seed", None)
    rng = random.Random(seed) if seed is not None else None
    try:
        match args.subcommand:
            case "keygen":
                pub, priv = textbookrsa.generate_keys(args.bits, rng)
                pspr("Key pair generated!")
                print(f"Public  Key: (n: {pub.modulus:#x}, e: {pub.exponent:#x})")
                print(f"Private Key: (n: {priv.modulus:#x}, d: {priv.exponent:#x})")
            case "encrypt":
                ciph = textbookrsa.encrypt(args.message, (args.modulus, args.exponent))
                pspr("Ciphertext:")
                print(f"{ciph:#x}")
            case "decrypt":
                clear = textbookrsa.decrypt(args.message, (args.modulus, args.exponent))
                pspr("Cleartext:")
                print(f"{clear:#x}")
            case "demo":
                if not run_demo(args.bits, args.rounds, rng):
                    print("Round trip failed!")
                    sys.exit(1)
    except (textbookrsa.RSAError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using textbook RSA!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
