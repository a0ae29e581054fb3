import pytest
from unipiece import read_vocab, write_vocab, validate_pieces, load_file

@pytest.fixture
def vocab_file(tmp_path):
  p = tmp_path / "spiece.vocab"
  p.write_text("<unk>\t0.0\n▁the\t-0.3\nthe\t-0.4\n\na\t-1.5\n", encoding="utf-8")
  return str(p)

def test_read_vocab_keeps_order(vocab_file):
  assert read_vocab(vocab_file) == [("<unk>", 0.0), ("▁the", -0.3), ("the", -0.4), ("a", -1.5)]

def test_load_file(vocab_file):
  model = load_file(vocab_file, strategy="dart")
  assert model.tokenize(" the") == ["▁the"]
  assert model.tokenize_with_ids(" the") == [("▁the", 1)]
  assert model.encode("the") == [2]

def test_write_then_read(tmp_path):
  path = str(tmp_path / "out" / "model.vocab")
  pieces = [("▁x", -1.25), ("tab\tinside", -2.0), ("cr\rinside", -0.5), ("y", -0.1)]
  write_vocab(path, pieces)
  assert read_vocab(path) == pieces

def test_missing_file(tmp_path):
  with pytest.raises(FileNotFoundError):
    read_vocab(str(tmp_path / "nope.vocab"))

@pytest.mark.parametrize("content", ["a\n", "a\tnot-a-number\n"])
def test_malformed_lines(tmp_path, content):
  p = tmp_path / "bad.vocab"
  p.write_text(content, encoding="utf-8")
  with pytest.raises(ValueError):
    read_vocab(str(p))

def test_rejected_file_is_not_reported_loaded(tmp_path, capsys):
  p = tmp_path / "dup.vocab"
  p.write_text("a\t-1.0\na\t-2.0\n", encoding="utf-8")
  with pytest.raises(ValueError):
    read_vocab(str(p))
  assert "Loaded" not in capsys.readouterr().out

@pytest.mark.parametrize("pieces", [[("a", -1.0), ("a", -2.0)], [("a", float("nan"))], [("b", float("-inf"))], [("", -1.0)]])
def test_validate_rejects(pieces):
  with pytest.raises(ValueError):
    validate_pieces(pieces)

def test_write_rejects_newline(tmp_path):
  with pytest.raises(ValueError):
    write_vocab(str(tmp_path / "v.vocab"), [("a\nb", -1.0)])

if __name__ == "__main__":
  pytest.main([__file__, "-v"])
