from rich.pretty import pprint

from argsxd import *


parser = ArgParser("program_lol") \
    .author("BubbyRoosh") \
    .version("0.1.0") \
    .copyright("Copyright (C) 2021 BubbyRoosh") \
    .info("Example for simple arg parsing crate OwO") \
    .require_args(True) \
    .args(
        Arg("testflag").alias("t").describe("This is a test flag.").flag(False),
        Arg("testoption").alias("o").describe("This is a test option.").option("option"),
        Arg("testword").describe("This is a test word.").word(False),
    )


if __name__ == '__main__':
    pprint(parser.parse())
