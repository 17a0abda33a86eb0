#!/usr/bin/env python3
"""
linecode CLI - encode, decode and simulate line codes from the terminal.
"""

import logging
import sys

import click

from . import SAMPLES_PER_BIT, AMPLITUDE, NOISE_STD, BER_TRIALS, BER_BITS
from .schemes import Scheme, InvalidParameter
from .encoder import encode, encode_symbols
from .decoder import decode
from .simulation import Simulation, ber_sweep, theoretical_ber

_logger = logging.getLogger(__name__)

SCHEME_CHOICE = click.Choice([s.value for s in Scheme], case_sensitive=False)


def _scheme_option(f):
    return click.option(
        "-e", "--encoding",
        "scheme",
        type=SCHEME_CHOICE,
        required=True,
        help="Line code to use",
    )(f)


def _signal_options(f):
    f = click.option(
        "-a", "--amplitude",
        type=float,
        default=AMPLITUDE,
        show_default=True,
        help="Pulse amplitude in volts",
    )(f)
    f = click.option(
        "-n", "--samples-per-bit",
        type=int,
        default=SAMPLES_PER_BIT,
        show_default=True,
        help="Samples per bit",
    )(f)
    return f


def format_bits(bits: str, errors=(), width: int = 64) -> str:
    """Bit string with errored positions shown in brackets, wrapped to width."""
    marked = set(errors)
    chunks = []
    for i in range(0, len(bits), width):
        line = []
        for j, bit in enumerate(bits[i:i + width], start=i):
            line.append(f"[{bit}]" if j in marked else bit)
        chunks.append("".join(line))
    return "\n".join(chunks)


@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output with debug logging",
)
def main(verbose: bool):
    """
    Line-coding simulator.

    Examples:

        linecode encode 10110 -e Manchester

        linecode simulate 1100001000000001 -e HDB3 --noise 0.3 --seed 7

        linecode ber -e NRZ --noise 0.2 --noise 0.4 --trials 200
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        _logger.debug("Verbose logging enabled")


@main.command()
def schemes():
    """List the supported line codes."""
    for scheme in Scheme:
        click.echo(f"{scheme.value:<15} {scheme.full_name}")
        click.echo(f"{'':<15} {scheme.description}")


@main.command("encode")
@click.argument("bits")
@_scheme_option
@_signal_options
@click.option(
    "--samples",
    "show_samples",
    is_flag=True,
    help="Also print every sample value",
)
def encode_cmd(bits: str, scheme: str, samples_per_bit: int, amplitude: float, show_samples: bool):
    """Encode BITS and print the line symbols."""
    try:
        samples = encode(bits, scheme, samples_per_bit, amplitude)
        symbols = encode_symbols(bits, scheme)
    except InvalidParameter as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Bits:    {bits}")
    click.echo(f"Symbols: {symbols}")
    click.echo(f"Samples: {len(samples)}")
    if show_samples:
        click.echo(" ".join(f"{s:g}" for s in samples))


@main.command("decode")
@click.argument("values", nargs=-1)
@_scheme_option
@_signal_options
def decode_cmd(values, scheme: str, samples_per_bit: int, amplitude: float):
    """
    Decode sample VALUES back to bits.

    Reads whitespace-separated numbers from stdin when no VALUES are given.
    """
    if not values:
        values = sys.stdin.read().split()

    try:
        samples = [float(v) for v in values]
    except ValueError as e:
        click.echo(f"Error: invalid sample value: {e}", err=True)
        sys.exit(1)

    try:
        bits = decode(samples, scheme, samples_per_bit, amplitude)
    except InvalidParameter as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(bits)


@main.command()
@click.argument("bits")
@_scheme_option
@_signal_options
@click.option(
    "--noise",
    type=float,
    default=NOISE_STD,
    show_default=True,
    help="AWGN standard deviation in volts",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Noise RNG seed",
)
def simulate(bits: str, scheme: str, samples_per_bit: int, amplitude: float, noise: float, seed):
    """Send BITS through encoder, noisy line and decoder."""
    try:
        sim = Simulation(scheme, samples_per_bit, amplitude, noise, seed)
        result = sim.run(bits)
    except InvalidParameter as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    stats = result.stats
    click.echo(f"Encoding: {result.scheme.full_name}")
    click.echo(f"Symbols:  {encode_symbols(result.bits, result.scheme)}")
    click.echo(f"Sent:     {result.bits}")
    click.echo(f"Decoded:  {format_bits(result.decoded, result.errors)}")
    click.echo("-" * 40)
    if result.errors:
        click.echo(f"Errors:   {len(result.errors)} at {', '.join(str(p) for p in result.errors)}")
    else:
        click.echo("Errors:   none")
    click.echo(f"Accuracy: {stats.accuracy:.1f}%")


@main.command()
@_scheme_option
@_signal_options
@click.option(
    "--noise",
    "noise_levels",
    type=float,
    multiple=True,
    required=True,
    help="AWGN standard deviation in volts (repeatable)",
)
@click.option(
    "-t", "--trials",
    type=int,
    default=BER_TRIALS,
    show_default=True,
    help="Random trials per noise level",
)
@click.option(
    "-b", "--bits",
    "bits_per_trial",
    type=int,
    default=BER_BITS,
    show_default=True,
    help="Random bits per trial",
)
@click.option(
    "-w", "--workers",
    type=int,
    default=1,
    show_default=True,
    help="Worker threads",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Master RNG seed",
)
def ber(scheme: str, samples_per_bit: int, amplitude: float, noise_levels, trials: int,
        bits_per_trial: int, workers: int, seed):
    """Estimate bit-error rate at one or more noise levels."""
    try:
        results = ber_sweep(
            scheme,
            sorted(noise_levels),
            trials=trials,
            bits_per_trial=bits_per_trial,
            samples_per_bit=samples_per_bit,
            amplitude=amplitude,
            seed=seed,
            workers=workers,
        )
    except InvalidParameter as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"{'noise_std':>10}  {'errors':>8}  {'bits':>8}  {'BER':>10}  {'theory':>10}")
    for r in results:
        expected = theoretical_ber(r.scheme, r.noise_std, amplitude)
        theory = f"{expected:.3e}" if expected is not None else "-"
        click.echo(f"{r.noise_std:>10.3f}  {r.errors:>8d}  {r.bits:>8d}  {r.ber:>10.3e}  {theory:>10}")

    if Scheme.parse(scheme) == Scheme.HDB3:
        click.echo("Note: HDB3 B00V and a plain 1001 after an odd pulse count share one "
                   "line pattern; errors at zero noise are decoding ambiguity, not channel errors")


if __name__ == "__main__":
    main()
