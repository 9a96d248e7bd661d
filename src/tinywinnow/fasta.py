from typing import Callable, Dict, Generator, Tuple, TextIO
from pathlib import Path
from contextlib import contextmanager
import logging

import gzip

def seq_filter(*names: str) -> Callable[[str], bool]:
    if len(names) == 0: return lambda s: True
    wanted = set(names)
    def accepter(name: str) -> bool:
        return name in wanted or name.split(' ')[0] in wanted
    return accepter

REV = {
    'A': 'T',
    'T': 'A',
    'G': 'C',
    'C': 'G',
    'N': 'N',
    'a': 't',
    't': 'a',
    'g': 'c',
    'c': 'g',
    'n': 'n'
}

def revcomp(seq: str) -> str:
    try:
        return ''.join(REV[seq[i]] for i in range(len(seq)-1, -1, -1))
    except KeyError as e:
        raise ValueError(f"Can't reverse complement {seq[0:50]}, unknown base {e.args[0]!r}") from e

@contextmanager
def open_with_gz(p: Path):
    inf = None
    try:
        if is_gzip(p):
            inf = gzip.open(p, 'rt')
        else:
            inf = p.open('rt')
        yield inf
    finally:
        if inf is not None:
            inf.close()

def is_gzip(p: Path) -> bool:
    return p.name.lower().endswith(".gz")

def parse_fasta_stream(inf: TextIO) -> Generator[Tuple[str, str], None, None]:
    current_name = None
    current_sequence = []
    for line in inf:
        line = line.strip()
        if len(line) == 0:
            continue
        if line.startswith('>'):
            if current_name is not None:
                yield (current_name, ''.join(current_sequence).upper())
            current_name = line[1:]
            current_sequence = []
        elif current_name is not None:
            current_sequence.append(line)
    if current_name is not None:
        yield (current_name, ''.join(current_sequence).upper())

def read_fasta_stream(p: Path) -> Generator[Tuple[str, str], None, None]:
    logger = logging.getLogger("fasta.py")
    logger.info(f"Reading {p.name}")
    with open_with_gz(p) as inf:
        yield from parse_fasta_stream(inf)

def read_fasta(p: Path) -> Dict[str, str]:
    return {
        name: seq for (name, seq) in read_fasta_stream(p)
    }

def kmers(k: int, seq: str) -> Generator[str, None, None]:
    for i in range(len(seq) - k + 1):
        yield seq[i:i+k]
