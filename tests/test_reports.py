"""Tests for reading statistics (libro.reports)."""

from datetime import date

from libro.reports import author_stats, recent_books, year_stats


def test_author_stats_groups_shared_author(db, add_book):
    add_book("First", authors=["Anon"])
    add_book("Second", authors=["Anon"])
    add_book("Third", authors=["Someone"])

    stats = author_stats(db.get_books())
    assert [s.name for s in stats] == ["Anon", "Someone"]
    assert stats[0].book_count == 2
    assert stats[0].titles == ["First", "Second"]


def test_author_stats_average_and_limit(db, add_book, add_review):
    a = add_book("A", authors=["X"])
    b = add_book("B", authors=["X"])
    add_book("C", authors=["Y"])
    add_review(a, rating=5)
    add_review(a, rating=3)
    add_review(b, rating=2)

    stats = author_stats(db.get_books(), limit=1)
    assert len(stats) == 1
    x = stats[0]
    assert x.review_count == 3
    # mean of per-book averages: (4 + 2) / 2
    assert x.average_rating == 3.0


def test_author_without_reviews_has_no_average(db, add_book):
    add_book(authors=["Z"])
    assert author_stats(db.get_books())[0].average_rating is None


def test_year_stats(db, add_book, add_review):
    a = add_book("A", pages=100)
    b = add_book("B")
    add_review(a, rating=4, date_read=date(2023, 3, 1))
    add_review(a, rating=2, date_read=date(2024, 3, 1))
    add_review(b, rating=3, date_read=date(2024, 6, 1))

    stats = year_stats(db.get_books())
    assert stats.total_books == 2
    assert stats.total_pages == 100
    assert stats.total_reviews == 3
    assert stats.average_rating == 3.0
    assert stats.reads_by_year == [(2023, 1), (2024, 2)]


def test_year_stats_empty():
    stats = year_stats([])
    assert stats.total_books == 0
    assert stats.average_rating is None
    assert stats.reads_by_year == []


def test_recent_books(db, add_book):
    ids = [add_book(f"Book {n}") for n in range(4)]
    recent = recent_books(db.get_books(), limit=2)
    assert [b.id for b in recent] == [ids[3], ids[2]]
