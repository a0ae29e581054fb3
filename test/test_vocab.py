import numpy as np
import pytest
from unipiece import Piece, Vocabulary

@pytest.fixture
def vocab():
  return Vocabulary.build([("<unk>", 0.0), ("un", -0.1), ("do", -0.2), ("undo", -0.15)])

def test_lookup_exact_match_only(vocab):
  assert vocab.lookup("undo") == Piece("undo", np.float32(-0.15), 3)
  assert vocab.lookup("und") is None
  assert vocab.lookup("undone") is None
  assert "un" in vocab and "u" not in vocab

def test_ids_follow_load_order(vocab):
  assert [p.id for p in vocab] == [0, 1, 2, 3]
  assert vocab.texts() == ["<unk>", "un", "do", "undo"]
  assert vocab.id_to_piece(2).text == "do"
  assert vocab.id_to_piece(9) is None

def test_scores_are_float32(vocab):
  assert vocab.lookup("do").score.dtype == np.float32

def test_duplicate_text_last_wins():
  vocab = Vocabulary.build([("ab", -1.0), ("c", -2.0), ("ab", -0.5)])
  assert len(vocab) == 2
  assert vocab.lookup("ab") == Piece("ab", np.float32(-0.5), 2)
  assert vocab.id_to_piece(0) is None

def test_build_from_pieces_keeps_ids():
  vocab = Vocabulary.build([Piece("x", -1.0, 5), Piece("yz", -2.0, 1)])
  assert vocab.lookup("x").id == 5
  assert vocab.id_to_piece(1).text == "yz"
  assert vocab.max_length == 2

def test_negative_id_rejected():
  with pytest.raises(ValueError):
    Vocabulary.build([Piece("x", -1.0, -1)])
  with pytest.raises(ValueError):
    Vocabulary.build([Piece("x", -1.0, 0), Piece("y", -1.0, -1)])

def test_empty_vocab():
  vocab = Vocabulary.build([])
  assert len(vocab) == 0 and vocab.max_length == 0
  assert vocab.lookup("a") is None

if __name__ == "__main__":
  pytest.main([__file__, "-v"])
