import math, os
from typing import Iterable, List, Tuple

def validate_pieces(pieces: Iterable[Tuple[str, float]]) -> List[Tuple[str, float]]:
  """rejects what the vocabulary itself would silently accept: duplicates, empty texts, non-finite scores"""
  checked, seen = [], {}
  for idx, (text, score) in enumerate(pieces):
    if not text: raise ValueError(f"Piece {idx} has empty text")
    if text in seen: raise ValueError(f"Duplicate piece {text!r} at positions {seen[text]} and {idx}")
    score = float(score)
    if not math.isfinite(score): raise ValueError(f"Piece {text!r} has non-finite score {score}")
    seen[text] = idx
    checked.append((text, score))
  return checked

def read_vocab(path: str) -> List[Tuple[str, float]]:
  """reads `piece<TAB>score` lines, keeping file order (it becomes the id order)"""
  if not os.path.exists(path): raise FileNotFoundError(f"Vocabulary file does not exist: {path}")
  pieces = []
  with open(path, 'r', encoding='utf-8', newline='\n') as f:
    for lineno, line in enumerate(f, 1):
      line = line.rstrip('\n')
      if not line: continue
      if '\t' not in line: raise ValueError(f"{path}:{lineno}: expected 'piece<TAB>score', got {line!r}")
      text, score = line.rsplit('\t', 1)
      try: pieces.append((text, float(score)))
      except ValueError: raise ValueError(f"{path}:{lineno}: invalid score {score!r}") from None
  pieces = validate_pieces(pieces)
  print(f"Loaded {len(pieces)} pieces from {path}")
  return pieces

def write_vocab(path: str, pieces: Iterable[Tuple[str, float]]):
  pieces = validate_pieces(pieces)
  for text, _ in pieces:
    if '\n' in text: raise ValueError(f"Piece {text!r} cannot be written, it contains a newline")
  vocab_dir = os.path.dirname(path)
  if vocab_dir: os.makedirs(vocab_dir, exist_ok=True)
  with open(path, 'w', encoding='utf-8', newline='\n') as f:
    for text, score in pieces: f.write(f"{text}\t{score!r}\n")
  print(f"Vocabulary saved to: {path}")
