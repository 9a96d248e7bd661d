import click
import logging

from pathlib import Path

from .fasta import read_fasta_stream, seq_filter
from .seeds import DEFAULT_SEED, MinimizerParams, create_seeds_table
from .views import minimizers


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log every rescan and exhaustion")
def main(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@main.command("minimizers")
@click.argument("fasta", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--window", "-w", type=click.IntRange(min=1), default=20, show_default=True, help="Window size, in bases")
@click.option("--kmer", "-k", type=click.IntRange(min=1), default=15, show_default=True)
@click.option("--seed", type=int, default=DEFAULT_SEED, help="XOR-ed into every k-mer hash")
@click.option("--forward-only", is_flag=True, help="Don't combine with reverse complement hashes")
@click.option("--seq", "seq_names", multiple=True, help="Only minimize the named sequences")
@click.option("--output", "-o", type=click.File("wt"), default="-")
def minimize_fasta(fasta: Path, window: int, kmer: int, seed: int, forward_only: bool, seq_names, output):
    if kmer > window:
        raise click.BadParameter(f"k-mer size {kmer} is larger than the window", param_hint="--kmer")
    params = MinimizerParams(window_size=window, k=kmer, seed=seed)
    if forward_only and params.kmer_window == 1:
        raise click.BadParameter(f"a window of {window} bases holds a single {kmer}-mer, use a larger window or both strands", param_hint="--window")
    accept = seq_filter(*seq_names)
    records = [(name, seq) for (name, seq) in read_fasta_stream(fasta) if accept(name)]
    try:
        seeds_df = create_seeds_table(params, records, canonical=not forward_only)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    seeds_df.to_csv(output, sep='\t', index=False)


@main.command("window")
@click.argument("values", nargs=-1, type=int, required=True)
@click.option("--window", "-w", type=int, required=True)
def minimize_values(values, window: int):
    try:
        view = minimizers(list(values), window)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--window") from e
    for v in view:
        click.echo(v)
