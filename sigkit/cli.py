"""
Command line filter designer.

Usage:
    sigkit lowpass --n 10 --omega-p 0.2 --omega-s 0.3
    sigkit halfband --n 8 --omega-p 0.2 --output halfband.txt
    sigkit hilbert --n 50 --omega1 0.03 --omega2 0.97 --config design.yaml
    sigkit iir --family chebyshev1 --order 5 --passband bandpass --f1 1.0 --f2 3.0
"""

import argparse
import logging
from pathlib import Path

import numpy as np
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from sigkit import __version__
from sigkit.filters.equiripple import (
    EquirippleLowpass,
    EquirippleHighpass,
    EquirippleHalfBand,
    CenteredHilbertTransform,
    StaggeredHilbertTransform,
    CenteredDifferentiator,
    StaggeredDifferentiator,
)
from sigkit.filters.iir import Butterworth, ChebyshevI, ChebyshevII, PassbandType
from sigkit.utils.config import DEFAULT_CONFIG, load_config
from sigkit.utils.logging import setup_logging, log_design_summary

console = Console()

IIR_FAMILIES = ('butterworth', 'chebyshev1', 'chebyshev2')


def design_filter(args: argparse.Namespace, config):
    """Instantiate the design selected on the command line."""
    if args.command == 'lowpass':
        return EquirippleLowpass(args.n, args.omega_p, args.wp, args.omega_s, args.ws, config=config)
    elif args.command == 'highpass':
        return EquirippleHighpass(args.n, args.omega_s, args.ws, args.omega_p, args.wp, config=config)
    elif args.command == 'halfband':
        return EquirippleHalfBand(args.n, args.omega_p, config=config)
    elif args.command == 'hilbert':
        if args.staggered:
            return StaggeredHilbertTransform(args.n, args.omega1, config=config)
        return CenteredHilbertTransform(args.n, args.omega1, args.omega2, config=config)
    elif args.command == 'differentiator':
        if args.staggered:
            return StaggeredDifferentiator(args.n, args.delta, config=config)
        return CenteredDifferentiator(args.n, args.delta, args.omega_p, config=config)
    raise ValueError(f"Unknown design: {args.command}")


def design_iir(args: argparse.Namespace):
    """Instantiate the IIR design selected on the command line."""
    passband = PassbandType(args.passband)
    if args.family == 'butterworth':
        return Butterworth(args.order, passband, args.f1, args.f2, args.delta)
    elif args.family == 'chebyshev1':
        return ChebyshevI(args.order, args.epsilon, passband, args.f1, args.f2, args.delta)
    return ChebyshevII(args.order, args.epsilon, passband, args.f1, args.f2, args.delta)


def display_sections(sos: np.ndarray, console: Console):
    """Display second-order section coefficients in a formatted table."""
    table = Table(
        title=f"[bold]Second-Order Sections ({sos.shape[0]})[/bold]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Section", justify="right", style="bold")
    for name in ('b0', 'b1', 'b2', 'a1', 'a2'):
        table.add_column(name, justify="right")

    for i, row in enumerate(sos):
        table.add_row(str(i), *(f"{row[j]: .6e}" for j in (0, 1, 2, 4, 5)))

    console.print(table)


def display_coefficients(coefficients: np.ndarray, console: Console):
    """Display filter taps in a formatted table."""
    table = Table(
        title=f"[bold]Filter Coefficients ({coefficients.shape[0]} taps)[/bold]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Index", justify="right", style="bold")
    table.add_column("Coefficient", justify="right")

    for i, c in enumerate(coefficients):
        table.add_row(str(i), f"{c: .8e}")

    console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sigkit',
        description="Equiripple FIR and Butterworth/Chebyshev IIR filter design",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', type=str, default=None, help='YAML file with design parameters')
    parser.add_argument('--log-file', type=str, default=None, help='Write a detailed design log to this file')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the initial extrema jitter')
    parser.add_argument('--output', type=str, default=None, help='Save the coefficients as text to this file')
    parser.add_argument('--quiet', action='store_true', help='Do not print the coefficient table')

    subparsers = parser.add_subparsers(dest='command', required=True)
    fmt = argparse.ArgumentDefaultsHelpFormatter

    p = subparsers.add_parser('lowpass', help='Two-band lowpass filter', formatter_class=fmt)
    p.add_argument('--n', type=int, default=10, help='Half order (2n+1 taps)')
    p.add_argument('--omega-p', type=float, default=0.2, help='Passband edge')
    p.add_argument('--wp', type=float, default=1.0, help='Passband weight')
    p.add_argument('--omega-s', type=float, default=0.3, help='Stopband edge')
    p.add_argument('--ws', type=float, default=1.0, help='Stopband weight')

    p = subparsers.add_parser('highpass', help='Two-band highpass filter', formatter_class=fmt)
    p.add_argument('--n', type=int, default=10, help='Half order (2n+1 taps)')
    p.add_argument('--omega-s', type=float, default=0.2, help='Stopband edge')
    p.add_argument('--ws', type=float, default=1.0, help='Stopband weight')
    p.add_argument('--omega-p', type=float, default=0.3, help='Passband edge')
    p.add_argument('--wp', type=float, default=1.0, help='Passband weight')

    p = subparsers.add_parser('halfband', help='Half-band lowpass filter', formatter_class=fmt)
    p.add_argument('--n', type=int, default=8, help='Prototype half length (4n-1 taps)')
    p.add_argument('--omega-p', type=float, default=0.2, help='Passband edge (< 0.5)')

    p = subparsers.add_parser('hilbert', help='Hilbert transformer', formatter_class=fmt)
    p.add_argument('--n', type=int, default=50, help='Half order')
    p.add_argument('--omega1', type=float, default=0.03, help='Lower band edge')
    p.add_argument('--omega2', type=float, default=0.97, help='Upper band edge (centered design only)')
    p.add_argument('--staggered', action='store_true', help='Even-length design with a half-sample delay')

    p = subparsers.add_parser('differentiator', help='Differentiator', formatter_class=fmt)
    p.add_argument('--n', type=int, default=20, help='Half order')
    p.add_argument('--delta', type=float, default=1.0, help='Sampling interval in seconds')
    p.add_argument('--omega-p', type=float, default=0.8, help='Upper band edge (centered design only)')
    p.add_argument('--staggered', action='store_true', help='Even-length design with a half-sample delay')

    p = subparsers.add_parser('iir', help='Butterworth or Chebyshev IIR filter', formatter_class=fmt)
    p.add_argument('--family', choices=IIR_FAMILIES, default='butterworth', help='Analog prototype')
    p.add_argument('--order', type=int, default=4, help='Prototype order')
    p.add_argument('--passband', choices=[t.value for t in PassbandType], default='lowpass',
                   help='Passband type')
    p.add_argument('--f1', type=float, default=1.0, help='Lower band edge in Hz (highpass, bandpass)')
    p.add_argument('--f2', type=float, default=2.0, help='Upper band edge in Hz (lowpass, bandpass)')
    p.add_argument('--delta', type=float, default=0.05, help='Sampling interval in seconds')
    p.add_argument('--epsilon', type=float, default=0.1, help='Chebyshev ripple parameter')

    return parser


def _save(array: np.ndarray, path: str, logger: logging.Logger):
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(output_path, array, fmt='%.12e')
    console.print(f"[green]✓[/green] Coefficients saved to {output_path}")
    logger.info(f"Coefficients saved to {output_path}")


def _report_iir(design, args: argparse.Namespace, logger: logging.Logger) -> int:
    sos = design.sos

    log_design_summary(logger, f"{type(design).__name__} DESIGN", {
        'passband': args.passband,
        'order': args.order,
        'sections': sos.shape[0],
        'f1': args.f1,
        'f2': args.f2,
        'delta': args.delta,
    })

    if not args.quiet:
        display_sections(sos, console)

    console.print(Panel.fit(
        f"[bold blue]{type(design).__name__}[/bold blue] ({args.passband})\n"
        f"Sections: {sos.shape[0]} | DC gain: {abs(design.evaluate(0.0)):.4f} | "
        f"Nyquist gain: {abs(design.evaluate(np.pi)):.4f}",
        border_style="blue"
    ))

    if args.output:
        _save(sos, args.output, logger)

    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_logging(
        log_file=args.log_file,
        level=logging.DEBUG if args.log_file else logging.INFO,
        name='sigkit'
    )

    config = load_config(args.config) if args.config else DEFAULT_CONFIG
    config = config.with_overrides(seed=args.seed)

    try:
        if args.command == 'iir':
            design = design_iir(args)
        else:
            design = design_filter(args, config)
    except ValueError as e:
        logger.error(f"Design failed: {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
        return 2

    if args.command == 'iir':
        return _report_iir(design, args, logger)

    coefficients = design.coefficients
    result = design.design_result

    log_design_summary(logger, f"{type(design).__name__} DESIGN", {
        'taps': coefficients.shape[0],
        'iterations': result.iterations,
        'delta': result.delta,
        'converged': result.converged,
        'grid_density': config.grid_density,
        'seed': config.seed,
    })

    if not args.quiet:
        display_coefficients(coefficients, console)

    status = "[green]converged[/green]" if result.converged else "[yellow]iteration cap reached[/yellow]"
    console.print(Panel.fit(
        f"[bold blue]{type(design).__name__}[/bold blue]\n"
        f"Taps: {coefficients.shape[0]} | Iterations: {result.iterations} | "
        f"Deviation: {abs(result.delta):.4e} | {status}",
        border_style="blue"
    ))

    if args.output:
        _save(coefficients, args.output, logger)

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
