import logging
import pandas as pd

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple
from rich.console import Console
from rich.progress import track

from .views import MinimizerView, dual_minimizers, minimizers

DEFAULT_SEED = 0x8F3F73B5CF1C9ADE

RANK = {
    'A': 0, 'C': 1, 'G': 2, 'T': 3, 'N': 0,
    'a': 0, 'c': 1, 'g': 2, 't': 3, 'n': 0,
}

MAX_K = 32
HASH_MASK = (1 << 64) - 1

SEED_COLUMNS = ['seq_name', 'rank', 'hash']


@dataclass
class MinimizerParams:
    """'window_size' counts bases, so each window holds window_size - k + 1 k-mers"""

    window_size: int
    k: int
    seed: int = field(default=DEFAULT_SEED)

    @property
    def kmer_window(self) -> int: return self.window_size - self.k + 1


def encode(seq: str) -> List[int]:
    """2-bit ranks of the bases in 'seq'; N is read as A"""
    try:
        return [RANK[c] for c in seq]
    except KeyError as e:
        raise ValueError(f"Can't hash {seq[0:50]}, unknown base {e.args[0]!r}") from e


def kmer_hashes(k: int, seq: str) -> List[int]:
    """Hashes each k-mer of 'seq' to its 2-bit encoding, with the first base most significant.
    """
    mask = (1 << (2 * k)) - 1
    hashes = []
    h = 0
    for (i, r) in enumerate(encode(seq)):
        h = ((h << 2) | r) & mask
        if i >= k - 1:
            hashes.append(h)
    return hashes


def revcomp_hashes(k: int, seq: str) -> List[int]:
    """Hashes the reverse complement of the k-mer starting at each offset of 'seq'

    The i-th hash here belongs to the same k-mer as the i-th hash of kmer_hashes(k, seq).
    """
    shift = 2 * (k - 1)
    hashes = []
    h = 0
    for (i, r) in enumerate(encode(seq)):
        h = (h >> 2) | ((3 - r) << shift)
        if i >= k - 1:
            hashes.append(h)
    return hashes


def minimizer_hashes(seq: str, params: MinimizerParams, canonical: bool = True) -> MinimizerView[int]:
    """Creates a lazy view of the minimizer hashes of a nucleotide sequence.

    Every k-mer hash is XOR-ed with the seed, so that the minimizers aren't biased towards
    poly-A runs. When 'canonical' is set, each position is worth the smaller of the forward
    and reverse complement hashes, so a sequence and its reverse complement share minimizers.
    """
    if params.k < 1 or params.k > MAX_K:
        raise ValueError(f"The k-mer size must be between 1 and {MAX_K}, got {params.k}")
    if params.seed < 0 or params.seed > HASH_MASK:
        raise ValueError(f"The seed must fit in 64 unsigned bits, got {params.seed}")
    if params.k > params.window_size:
        raise ValueError(f"The k-mer size ({params.k}) cannot be greater than the window size ({params.window_size})")
    forward = [h ^ params.seed for h in kmer_hashes(params.k, seq)]
    if canonical:
        reverse = [h ^ params.seed for h in revcomp_hashes(params.k, seq)]
        return dual_minimizers(forward, reverse, params.kmer_window)
    return minimizers(forward, params.kmer_window)


def create_seeds_df(params: MinimizerParams, seq_name: str, seq: str, canonical: bool = True) -> pd.DataFrame:
    """Creates a table of the minimizer hashes of 'seq', one row per minimizer, in emission order
    """
    seed_dict = { 'hash': [], 'rank': [] }
    for (rank, h) in enumerate(minimizer_hashes(seq, params, canonical=canonical)):
        seed_dict['hash'].append(h)
        seed_dict['rank'].append(rank)
    seed_df = pd.DataFrame({
        'hash': pd.Series(seed_dict['hash'], dtype='uint64'),
        'rank': pd.Series(seed_dict['rank'], dtype='int64'),
    })
    seed_df['seq_name'] = seq_name
    return seed_df[SEED_COLUMNS]


def create_seeds_table(params: MinimizerParams, records: Iterable[Tuple[str, str]], canonical: bool = True) -> pd.DataFrame:
    logger = logging.getLogger("seeds")
    records = list(records)
    frames = [
        create_seeds_df(params, name, seq, canonical=canonical)
        for (name, seq) in track(records, description=f"Minimizing {len(records)} sequences", console=Console(stderr=True))
    ]
    if len(frames) == 0:
        return pd.DataFrame(columns=SEED_COLUMNS)
    seeds_df = pd.concat(frames, ignore_index=True)
    logger.info(f"{len(seeds_df)} minimizers from {len(records)} sequences, {params=}")
    return seeds_df
