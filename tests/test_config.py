import pytest

from intvcore.config import (
    CONFIG_VER,
    MAX_CONFIGS,
    Config,
    ConfigDatabase,
    sound_clock_divisor,
)


def test_default_values_match_source():
    cfg = Config()
    assert cfg.key_A_map == 12
    assert cfg.key_Y_map == 14
    assert cfg.spare9 == 2
    assert cfg.config_ver == CONFIG_VER


def test_pack_layout():
    data = Config(crc=0x12345678).pack()
    assert len(data) == Config.SIZE
    assert data[:4] == b"\x78\x56\x34\x12"
    assert data[4:6] == b"\x01\x00"


def test_pack_unpack_round_trip():
    cfg = Config(crc=0xDEADBEEF, overlay_selected=5, controller_type=3, show_fps=2)
    assert Config.unpack(cfg.pack()) == cfg


def test_unpack_wrong_length():
    with pytest.raises(ValueError):
        Config.unpack(b"\x00" * (Config.SIZE - 1))


def test_pack_out_of_range():
    with pytest.raises(ValueError):
        Config(key_A_map=70000).pack()


def test_sound_clock_divisor():
    assert sound_clock_divisor(Config(sound_clock_div=0)) == 8
    assert sound_clock_divisor(Config(sound_clock_div=6)) == 64
    with pytest.raises(ValueError):
        sound_clock_divisor(Config(sound_clock_div=7))


def test_load_creates_missing_file(tmp_path):
    path = tmp_path / "data" / "NINTV-DS.DAT"
    db = ConfigDatabase(path)
    db.load()
    assert path.stat().st_size == MAX_CONFIGS * Config.SIZE
    assert all(slot.crc == 0 and slot.config_ver == CONFIG_VER for slot in db.slots)


def test_store_save_and_reload(tmp_path):
    path = tmp_path / "NINTV-DS.DAT"
    db = ConfigDatabase(path)
    db.load()
    cfg = Config(crc=0xCAFEF00D, overlay_selected=3)
    assert db.store(cfg) == 0
    db.save()

    other = ConfigDatabase(path)
    other.load()
    assert other.find(0xCAFEF00D) == cfg


def test_store_replaces_matching_slot(tmp_path):
    db = ConfigDatabase(tmp_path / "db.dat")
    db.store(Config(crc=1))
    db.store(Config(crc=2))
    assert db.store(Config(crc=1, show_fps=1)) == 0
    assert db.find(1).show_fps == 1


def test_find_unknown_returns_none(tmp_path):
    db = ConfigDatabase(tmp_path / "db.dat")
    db.store(Config(crc=5))
    assert db.find(6) is None


def test_find_returns_copy(tmp_path):
    db = ConfigDatabase(tmp_path / "db.dat")
    db.store(Config(crc=5))
    found = db.find(5)
    found.show_fps = 2
    assert db.find(5).show_fps == 0


def test_store_full_raises(tmp_path):
    db = ConfigDatabase(tmp_path / "db.dat")
    for crc in range(1, MAX_CONFIGS + 1):
        db.store(Config(crc=crc))
    with pytest.raises(ValueError):
        db.store(Config(crc=MAX_CONFIGS + 1))


def test_version_mismatch_rebuilds(tmp_path):
    path = tmp_path / "db.dat"
    stale = Config(crc=7, config_ver=CONFIG_VER + 1)
    path.write_bytes(stale.pack() * MAX_CONFIGS)
    db = ConfigDatabase(path)
    db.load()
    assert db.find(7) is None
    assert db.slots[0].config_ver == CONFIG_VER
    reread = ConfigDatabase(path)
    reread.load()
    assert reread.find(7) is None