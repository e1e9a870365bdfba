import __about__


def test_metadata_summary():
    meta = __about__.metadata_summary()
    assert meta["title"] == "Locus"
    assert meta["license"] == "LGPL-3.0-or-later"
    assert set(meta) == {"title", "version", "license", "description", "copyright"}
