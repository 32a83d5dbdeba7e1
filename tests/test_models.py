from __future__ import annotations

from datetime import datetime
import os

from core.models import Album, Photo, Tag, User


def test_tag_equality_is_structural():
    assert Tag("location", "NYC") == Tag("location", "NYC")
    assert Tag("location", "NYC") != Tag("location", "LA")
    assert len({Tag("a", "b"), Tag("a", "b")}) == 1
    assert str(Tag("person", "John")) == "person:John"


def test_photo_equality_by_file_path_only(make_photo):
    p = make_photo("/x/a.jpg", caption="one")
    q = make_photo("/x/a.jpg", caption="two")
    q.add_tag(Tag("k", "v"))
    r = make_photo("/x/b.jpg", caption="one")
    assert p == q
    assert hash(p) == hash(q)
    assert p != r
    assert p != "/x/a.jpg"


def test_photo_date_defaults_to_file_mtime_truncated(tmp_path):
    f = tmp_path / "pic.jpg"
    f.write_text("x")
    os.utime(f, (1_700_000_000.75, 1_700_000_000.75))
    photo = Photo(str(f))
    assert photo.date_taken == datetime.fromtimestamp(1_700_000_000)
    assert photo.date_taken.microsecond == 0
    assert photo.file_name == "pic.jpg"


def test_photo_date_for_missing_file_is_now(tmp_path):
    before = datetime.now().replace(microsecond=0)
    photo = Photo(str(tmp_path / "missing.jpg"))
    assert before <= photo.date_taken <= datetime.now()


def test_explicit_date_is_truncated():
    photo = Photo("/a.jpg", date_taken=datetime(2024, 5, 1, 10, 0, 0, 999_999))
    assert photo.date_taken == datetime(2024, 5, 1, 10, 0, 0)


def test_photo_tags(make_photo):
    photo = make_photo("/a.jpg")
    assert photo.add_tag(Tag("person", "John"))
    assert not photo.add_tag(Tag("person", "John"))
    assert photo.add_tag(Tag("person", "Jane"))
    assert photo.add_tag(Tag("location", "NYC"))
    assert len(photo.tags) == 3
    assert photo.has_tag("person", "Jane")
    assert not photo.has_tag("person", "Bob")
    assert photo.find_tags_by_name("person") == [Tag("person", "John"), Tag("person", "Jane")]
    assert photo.remove_tag(Tag("person", "John"))
    assert not photo.remove_tag(Tag("person", "John"))
    assert photo.tags == [Tag("person", "Jane"), Tag("location", "NYC")]


def test_set_caption_overwrites(make_photo):
    photo = make_photo("/a.jpg", caption="old")
    photo.set_caption("")
    assert photo.caption == ""


def test_album_add_photo_is_idempotent_by_path(make_photo):
    album = Album("trip")
    assert album.add_photo(make_photo("/a.jpg"))
    assert not album.add_photo(make_photo("/a.jpg", caption="other instance"))
    assert album.photo_count == 1
    assert str(album) == "trip (1 photos)"


def test_album_remove_photo_by_equality(make_photo):
    album = Album("trip")
    album.add_photo(make_photo("/a.jpg"))
    assert album.remove_photo(make_photo("/a.jpg"))
    assert not album.remove_photo(make_photo("/a.jpg"))
    assert album.photo_count == 0


def test_album_date_range(make_photo):
    album = Album("trip")
    assert album.get_date_range() is None
    album.add_photo(make_photo("/b.jpg", datetime(2024, 3, 1)))
    album.add_photo(make_photo("/a.jpg", datetime(2023, 1, 5, 8, 30)))
    album.add_photo(make_photo("/c.jpg", datetime(2024, 2, 1)))
    assert album.get_date_range() == (datetime(2023, 1, 5, 8, 30), datetime(2024, 3, 1))


def test_photo_shared_between_albums(make_photo):
    photo = make_photo("/a.jpg")
    first, second = Album("one"), Album("two")
    first.add_photo(photo)
    second.add_photo(photo)
    photo.set_caption("edited")
    photo.add_tag(Tag("k", "v"))
    assert second.photos[0].caption == "edited"
    assert second.photos[0].has_tag("k", "v")
    first.remove_photo(photo)
    assert second.contains(photo)


def test_user_album_names_unique():
    user = User("alice")
    assert user.add_album(Album("x"))
    assert not user.add_album(Album("x"))
    assert user.add_album(Album("y"))
    assert [a.name for a in user.albums] == ["x", "y"]
    assert user.find_album_by_name("y") is user.albums[1]
    assert user.find_album_by_name("z") is None


def test_user_remove_album_detaches_only(make_photo):
    user = User("alice")
    a, b = Album("a"), Album("b")
    user.add_album(a)
    user.add_album(b)
    photo = make_photo("/p.jpg")
    a.add_photo(photo)
    b.add_photo(photo)
    assert user.remove_album(a)
    assert not user.remove_album(a)
    assert user.find_photo("/p.jpg") is photo


def test_user_rename_album():
    user = User("alice")
    a, b = Album("a"), Album("b")
    user.add_album(a)
    user.add_album(b)
    assert not user.rename_album(a, "b")
    assert user.rename_album(a, "a")
    assert user.rename_album(a, "c")
    assert a.name == "c"


def test_user_resolve_photo_reuses_instance(make_photo):
    user = User("alice")
    album = Album("a")
    user.add_album(album)
    photo = make_photo("/p.jpg")
    album.add_photo(photo)
    assert user.resolve_photo("/p.jpg") is photo
    fresh = user.resolve_photo("/nope.jpg")
    assert fresh.file_path == "/nope.jpg"
    assert user.find_photo("/nope.jpg") is None


def test_reserved_usernames():
    assert User("admin").is_admin
    assert not User("stock").is_admin


def test_constructor_drops_duplicate_tags():
    photo = Photo(
        "/a.jpg",
        date_taken=datetime(2024, 1, 1),
        tags=[Tag("k", "v"), Tag("x", "y"), Tag("k", "v")],
    )
    assert photo.tags == [Tag("k", "v"), Tag("x", "y")]
    assert not photo.add_tag(Tag("x", "y"))
