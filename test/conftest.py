from pathlib import Path 
import pytest 

@pytest.fixture
def examples_dir(): 
    test_dir = Path(__file__).parent 
    return test_dir / 'example' 

@pytest.fixture 
def simple_fasta(examples_dir): 
    return examples_dir / 'simple.fasta'

@pytest.fixture
def reference_values():
    return [28, 100, 9, 23, 4, 1, 72, 37, 8]

@pytest.fixture
def reference_secondary():
    return [30, 2, 11, 101, 199, 73, 34, 900]

class Replayable:
    """A re-enterable, unsized sequence that counts its passes"""

    def __init__(self, values):
        self.values = list(values)
        self.passes = 0

    def __iter__(self):
        self.passes += 1
        return iter(self.values)

@pytest.fixture
def replayable():
    return Replayable
