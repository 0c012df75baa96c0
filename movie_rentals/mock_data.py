"""Fixed seed batch for `insertMock`: 10 movies, 5 customers, 14 rentals.

Rental rows reference customer and movie ids by position, so they line up
with a freshly created schema.
"""

import datetime as dt

MOVIES = [
    ("The Shawshank Redemption", 1994, "Drama", "Frank Darabont"),
    ("The Godfather", 1972, "Crime", "Francis Ford Coppola"),
    ("The Dark Knight", 2008, "Action", "Christopher Nolan"),
    ("The Lord of the Rings: The Return of the King", 2003, "Adventure", "Peter Jackson"),
    ("Pulp Fiction", 1994, "Crime", "Quentin Tarantino"),
    ("Forrest Gump", 1994, "Drama", "Robert Zemeckis"),
    ("Inception", 2010, "Action", "Christopher Nolan"),
    ("The Matrix", 1999, "Action", "Lana Wachowski, Lilly Wachowski"),
    ("The Lord of the Rings: The Fellowship of the Ring", 2001, "Adventure", "Peter Jackson"),
    ("The Lord of the Rings: The Two Towers", 2002, "Adventure", "Peter Jackson"),
]

CUSTOMERS = [
    ("Alice", "Appleseed", "alice.appleseed@example.com", "555-1234"),
    ("Bob", "Brown", "bob.brown@example.com", "555-5678"),
    ("Charlie", "Clark", "charlie.clark@example.com", "555-9876"),
    ("David", "Dunn", "david.dunn@example.com", "555-4321"),
    ("Eve", "Evans", "eve.evans@example.com", "555-8765"),
]


def _d(text: str) -> dt.date:
    return dt.date.fromisoformat(text)


# (customer_id, movie_id, rental_date, return_date)
RENTALS = [
    (1, 1, _d("2021-01-01"), _d("2021-01-08")),
    (1, 2, _d("2021-01-09"), _d("2021-01-16")),
    (2, 3, _d("2021-01-17"), _d("2021-01-24")),
    (2, 4, _d("2021-01-25"), _d("2021-02-01")),
    (3, 5, _d("2021-02-02"), _d("2021-02-09")),
    (3, 6, _d("2021-02-10"), _d("2021-02-17")),
    (4, 7, _d("2021-02-18"), _d("2021-02-25")),
    (4, 8, _d("2021-02-26"), _d("2021-03-05")),
    (5, 9, _d("2021-03-06"), _d("2021-03-13")),
    (5, 10, _d("2021-03-14"), _d("2021-03-21")),
    (1, 9, _d("2021-03-28"), _d("2021-04-04")),
    (5, 9, _d("2021-04-12"), _d("2021-04-19")),
    (1, 4, _d("2024-04-12"), _d("2025-04-12")),
    (2, 1, _d("2024-04-12"), _d("2025-04-12")),
]
