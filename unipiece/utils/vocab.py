from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple, Union
import numpy as np

class Piece(NamedTuple):
  text: str
  score: np.float32
  id: int

PieceLike = Union[Piece, Tuple[str, float]]

class Vocabulary:
  """
    exact-match table of pieces keyed by text, built once at load time
    ids keep the original piece order: {'▁the': Piece('▁the', -0.3, 4), ...}
  """
  def __init__(self, pieces: Dict[str, Piece], size: int):
    self._pieces, self._by_id = pieces, [None] * size
    for piece in pieces.values(): self._by_id[piece.id] = piece
    self.max_length = max((len(text) for text in pieces), default=0)

  @classmethod
  def build(cls, pieces: Iterable[PieceLike]) -> "Vocabulary":
    table, size = {}, 0
    for idx, item in enumerate(pieces):
      if isinstance(item, Piece): piece = Piece(item.text, np.float32(item.score), int(item.id))
      else:
        text, score = item
        piece = Piece(text, np.float32(score), idx)
      if piece.id < 0: raise ValueError(f"Piece {piece.text!r} has negative id {piece.id}")
      table[piece.text] = piece  # duplicate texts: last one wins
      size = max(size, piece.id + 1)
    return cls(table, size)

  def lookup(self, text: str) -> Optional[Piece]: return self._pieces.get(text)

  def id_to_piece(self, idx: int) -> Optional[Piece]:
    if 0 <= idx < len(self._by_id): return self._by_id[idx]
    return None

  def texts(self) -> List[str]: return [piece.text for piece in self]
  def __len__(self): return len(self._pieces)
  def __contains__(self, text): return text in self._pieces
  def __iter__(self) -> Iterator[Piece]: return (piece for piece in self._by_id if piece is not None)
