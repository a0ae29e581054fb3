from typing import List, NamedTuple, Optional
import numpy as np
from .vocab import Vocabulary
from .trie import PrefixIndex

UNK_ID = 0
# below any reachable path score but still finite, so it compares
UNREACHABLE = np.finfo(np.float32).min

class Edge(NamedTuple):
  start: int  # code-point boundaries into the normalized text, half-open
  end: int
  score: np.float32  # path score at `end`
  id: int

  def text(self, source: str) -> str: return source[self.start:self.end]

class Lattice:
  """
    best path ending at every code-point boundary of `text`
    best_score[0] = 0, the rest start at -inf; best_edge[i] is None only for i == 0 once filled
  """
  def __init__(self, text: str):
    self.text, n = text, len(text)
    self.best_score = np.full(n + 1, -np.inf, dtype=np.float32)
    self.best_score[0] = 0.0
    self.best_edge: List[Optional[Edge]] = [None] * (n + 1)

  def __len__(self): return len(self.text)

  def offer(self, start: int, end: int, score: np.float32, idx: int):
    local = np.float32(self.best_score[start] + score)
    if local > self.best_score[end]:  # ties keep the edge found first
      self.best_edge[end] = Edge(start, end, local, idx)
      self.best_score[end] = local

  def close(self, end: int):
    """single-character unknown edge when nothing reachable ends at `end`; restarts the running score"""
    if self.best_score[end] <= UNREACHABLE:
      self.best_edge[end] = Edge(end - 1, end, UNREACHABLE, UNK_ID)
      self.best_score[end] = 0.0

def forward_naive(text: str, vocab: Vocabulary) -> Lattice:
  lattice = Lattice(text)
  for end in range(1, len(text) + 1):
    for start in range(end):
      piece = vocab.lookup(text[start:end])
      if piece is not None: lattice.offer(start, end, piece.score, piece.id)
    lattice.close(end)
  return lattice

def forward_prefix(text: str, index: PrefixIndex) -> Lattice:
  lattice, window = Lattice(text), max(index.max_length, 1)
  for start in range(len(text)):
    for match in index.common_prefix_matches(text[start:start + window]):
      lattice.offer(start, start + match.length, match.score, match.id)
    # every edge into start + 1 begins at or before start, so it is final now
    lattice.close(start + 1)
  return lattice

def backward(lattice: Lattice) -> List[Edge]:
  edges, pos = [], len(lattice)
  while pos > 0:
    edge = lattice.best_edge[pos]
    assert edge is not None, f"lattice has a gap at boundary {pos}"
    edges.append(edge)
    pos = edge.start
  edges.reverse()
  return edges
