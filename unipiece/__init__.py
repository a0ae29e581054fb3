from .model import Model, load, load_file, normalize, denormalize, WORD_BOUNDARY, STRATEGIES
from .utils import (Piece, Vocabulary, Match, PrefixIndex, CharTrie, CompressedTrie, build_index, Edge, Lattice,
                    forward_naive, forward_prefix, backward, read_vocab, write_vocab, validate_pieces, UNK_ID, UNREACHABLE)
