from typing import Iterable, List, Optional, Tuple
from .utils.vocab import Vocabulary, PieceLike
from .utils.trie import PrefixIndex, build_index
from .utils.lattice import Edge, Lattice, forward_naive, forward_prefix, backward
from .utils.io import read_vocab

WORD_BOUNDARY = "▁"
STRATEGIES = ("naive", "trie", "dart")

def normalize(text: str) -> str: return text.replace(" ", WORD_BOUNDARY)
def denormalize(text: str) -> str: return text.replace(WORD_BOUNDARY, " ")

class Model:
  """
    unigram segmentation over a fixed vocabulary
    strategy picks how candidate pieces are found at each position:
      naive - every substring looked up in the vocabulary, O(n^2)
      trie  - per-character trie, one common-prefix walk per position
      dart  - double-array trie over utf-8 bytes, same walk with compact storage
    the model is read-only once built, so one instance can serve any number of threads
  """
  def __init__(self, vocab: Vocabulary, index: Optional[PrefixIndex] = None, strategy: str = "trie"):
    if strategy not in STRATEGIES: raise ValueError(f"Unknown strategy '{strategy}', expected one of {STRATEGIES}")
    if strategy != "naive" and index is None: raise ValueError(f"Strategy '{strategy}' needs a prefix index")
    self.vocab, self.index, self.strategy = vocab, index, strategy

  def lattice(self, text: str) -> Lattice:
    text = normalize(text)
    if self.strategy == "naive": return forward_naive(text, self.vocab)
    return forward_prefix(text, self.index)

  def _decode(self, text: str) -> Tuple[Lattice, List[Edge]]:
    lattice = self.lattice(text)
    return lattice, backward(lattice)

  def tokenize(self, text: str) -> List[str]:
    lattice, edges = self._decode(text)
    return [edge.text(lattice.text) for edge in edges]

  def tokenize_with_ids(self, text: str) -> List[Tuple[str, int]]:
    lattice, edges = self._decode(text)
    return [(edge.text(lattice.text), edge.id) for edge in edges]

  def encode(self, text: str) -> List[int]: return [edge.id for edge in self._decode(text)[1]]

  def decode(self, pieces: Iterable[str]) -> str: return denormalize("".join(pieces))

  def score(self, text: str) -> float:
    """path score at the last boundary, restarted at 0 after every unknown character"""
    return float(self.lattice(text).best_score[-1])

  def __len__(self): return len(self.vocab)
  def __repr__(self): return f"Model(pieces={len(self.vocab)}, strategy='{self.strategy}')"

def load(pieces: Iterable[PieceLike], strategy: str = "trie") -> Model:
  """pieces in model order, as (text, score) pairs; ids are their positions"""
  if strategy not in STRATEGIES: raise ValueError(f"Unknown strategy '{strategy}', expected one of {STRATEGIES}")
  vocab = Vocabulary.build(pieces)
  index = None if strategy == "naive" else build_index(vocab, strategy)
  return Model(vocab, index, strategy)

def load_file(path: str, strategy: str = "trie") -> Model: return load(read_vocab(path), strategy)
