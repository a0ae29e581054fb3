from typing import Dict, List, NamedTuple, Tuple
import numpy as np
from .vocab import Vocabulary

class Match(NamedTuple):
  length: int  # in code points
  score: np.float32
  id: int

class PrefixIndex:
  """
    answers "which pieces are a prefix of this suffix?"
    matches come back shortest-prefix-first; max_length bounds the longest piece in code points
  """
  max_length = 0
  def common_prefix_matches(self, suffix: str) -> List[Match]: raise NotImplementedError
  def __len__(self): raise NotImplementedError

class TrieNode:
  def __init__(self, text: str = ""):
    self.text, self.length = text, len(text)
    self.score, self.id, self.is_piece = np.float32(0.0), 0, False
    self.children: Dict[str, "TrieNode"] = {}

class CharTrie(PrefixIndex):
  def __init__(self):
    self.root, self.count, self.max_length = TrieNode(), 0, 0

  @classmethod
  def build(cls, vocab: Vocabulary) -> "CharTrie":
    trie = cls()
    for piece in vocab: trie.insert(piece.text, piece.score, piece.id)
    return trie

  def insert(self, text: str, score: float, idx: int):
    if not text: return  # the root is the empty prefix and never a piece
    node = self.root
    for char in text:
      if char not in node.children: node.children[char] = TrieNode(node.text + char)
      node = node.children[char]
    if not node.is_piece: self.count += 1
    node.is_piece, node.score, node.id = True, np.float32(score), idx
    self.max_length = max(self.max_length, node.length)

  def common_prefix_matches(self, suffix: str) -> List[Match]:
    matches, node = [], self.root
    for char in suffix:
      node = node.children.get(char)
      if node is None: break
      if node.is_piece: matches.append(Match(node.length, node.score, node.id))
    return matches

  def __len__(self): return self.count

def _siblings(keys: List[bytes], depth: int, left: int, right: int) -> List[Tuple[int, int, int]]:
  """
    groups keys[left:right] by their byte at `depth`, shifted by one so code 0 marks "key ends here"
    eg: [b'a', b'ab', b'ac'] at depth 1 -> [(0, 0, 1), (99, 1, 2), (100, 2, 3)]
  """
  siblings = []
  for i in range(left, right):
    key = keys[i]
    code = key[depth] + 1 if depth < len(key) else 0
    if siblings and siblings[-1][0] == code: siblings[-1][2] = i + 1
    else: siblings.append([code, i, i + 1])
  return [tuple(s) for s in siblings]

class CompressedTrie(PrefixIndex):
  """
    double-array trie over the utf-8 bytes of the piece texts
    a cell p is a child of node n iff check[p] == n; children of n sit at base[n] + byte + 1,
    and base[n] + 0 is the terminal cell when the prefix up to n is itself a piece.
    only match boundaries come out of the arrays, score/id are resolved through the vocabulary
  """
  ROOT_MARK, FREE = -2, -1

  def __init__(self, base: np.ndarray, check: np.ndarray, vocab: Vocabulary, count: int):
    self.base, self.check, self.vocab, self.count = base, check, vocab, count
    self.max_length = vocab.max_length

  @classmethod
  def build(cls, sorted_texts: List[str], vocab: Vocabulary) -> "CompressedTrie":
    keys = [text.encode('utf-8', 'surrogatepass') for text in sorted_texts if text]
    for prev, key in zip(keys, keys[1:]):
      if key < prev: raise ValueError(f"Piece texts must be sorted by byte value, got {prev!r} before {key!r}")

    base, check = [0] * 1024, [cls.FREE] * 1024
    check[0], next_free = cls.ROOT_MARK, 1
    stack = [(0, 0, 0, len(keys))] if keys else []
    while stack:
      node, depth, left, right = stack.pop()
      siblings = _siblings(keys, depth, left, right)
      begin = max(1, next_free - siblings[0][0])
      while True:
        top = begin + siblings[-1][0]
        if top >= len(check):
          extra = max(len(check), top + 1 - len(check))
          base.extend([0] * extra)
          check.extend([cls.FREE] * extra)
        if all(check[begin + code] == cls.FREE for code, _, _ in siblings): break
        begin += 1
      base[node] = begin
      for code, _, _ in siblings: check[begin + code] = node
      for code, lo, hi in siblings:
        if code == 0: base[begin] = -lo - 1
        else: stack.append((begin + code, depth + 1, lo, hi))
      while next_free < len(check) and check[next_free] != cls.FREE: next_free += 1

    used = max(i for i, owner in enumerate(check) if owner != cls.FREE) + 1
    return cls(np.array(base[:used], dtype=np.int32), np.array(check[:used], dtype=np.int32), vocab, len(set(keys)))

  def prefix_ends(self, data: bytes) -> List[int]:
    """byte offsets in `data` at which a piece ends, shortest first"""
    base, check, size = self.base, self.check, len(self.check)
    ends, node = [], 0
    for i in range(len(data) + 1):
      offset = int(base[node])
      if 0 < offset < size and check[offset] == node: ends.append(i)
      if i == len(data): break
      child = offset + data[i] + 1
      if child >= size or check[child] != node: break
      node = child
    return ends

  def common_prefix_matches(self, suffix: str) -> List[Match]:
    data, matches = suffix.encode('utf-8', 'surrogatepass'), []
    for end in self.prefix_ends(data):
      text = data[:end].decode('utf-8', 'surrogatepass')
      piece = self.vocab.lookup(text)
      matches.append(Match(len(text), piece.score, piece.id))
    return matches

  @property
  def nbytes(self) -> int: return self.base.nbytes + self.check.nbytes
  def __len__(self): return self.count

INDEX_KINDS = ("trie", "dart")

def build_index(vocab: Vocabulary, kind: str = "trie") -> PrefixIndex:
  if kind == "trie": return CharTrie.build(vocab)
  if kind == "dart": return CompressedTrie.build(sorted(vocab.texts(), key=lambda t: t.encode('utf-8', 'surrogatepass')), vocab)
  raise ValueError(f"Unknown prefix index '{kind}', expected one of {INDEX_KINDS}")
