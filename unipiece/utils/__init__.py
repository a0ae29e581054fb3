from .vocab import Piece, Vocabulary
from .trie import Match, PrefixIndex, CharTrie, CompressedTrie, build_index
from .lattice import Edge, Lattice, forward_naive, forward_prefix, backward, UNK_ID, UNREACHABLE
from .io import read_vocab, write_vocab, validate_pieces
