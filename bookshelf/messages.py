"""
Client-facing response messages.

The wording is kept identical to the original Bookshelf API so that existing
clients and API test collections keep matching on it.
"""

HELLO = "Hello World"

ADD_SUCCESS = "Buku berhasil ditambahkan"
ADD_MISSING_NAME = "Gagal menambahkan buku. Mohon isi nama buku"
ADD_INVALID_PAGE_RANGE = "Gagal menambahkan buku. readPage tidak boleh lebih besar dari pageCount"
ADD_ERROR = "Buku gagal ditambahkan"

BOOK_NOT_FOUND = "Buku tidak ditemukan"

UPDATE_SUCCESS = "Buku berhasil diperbarui"
UPDATE_MISSING_NAME = "Gagal memperbarui buku. Mohon isi nama buku"
UPDATE_INVALID_PAGE_RANGE = "Gagal memperbarui buku. readPage tidak boleh lebih besar dari pageCount"
UPDATE_NOT_FOUND = "Gagal memperbarui buku. Id tidak ditemukan"

DELETE_SUCCESS = "Buku berhasil dihapus"
DELETE_NOT_FOUND = "Buku gagal dihapus. Id tidak ditemukan"

INVALID_REQUEST = "Permintaan tidak valid"
INTERNAL_ERROR = "Terjadi kegagalan pada server kami"
