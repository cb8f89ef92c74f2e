from typing import Callable, Iterator, Protocol, Tuple, runtime_checkable


@runtime_checkable
class BlobStoreProtocol(Protocol):
    """Blob store protocol mirroring `blobstore_lib.storage.BlobStore`.

    Implementations should follow the semantics documented on the abstract
    base class in `blobstore_lib.storage.base` (KeyNotFound for missing keys,
    KeyExists for create-only writes, StopListing to end a listing).
    """

    def get(self, key: str) -> bytes: ...

    def put(self, key: str, data: bytes, replace: bool = False) -> None: ...

    def delete(self, key: str) -> None: ...

    def list(self, start: str, visit: Callable[[str], object]) -> None: ...

    def len(self) -> int: ...

    def close(self) -> None: ...


@runtime_checkable
class EngineProtocol(Protocol):
    """Raw byte-oriented engine wrapped by `HashStore`.

    `get` and `delete` may raise whatever the engine natively raises for a
    missing key. `items` yields every (key, value) pair in no particular
    order; a fresh call starts a fresh scan. The engine is responsible for
    its own locking if it is shared between threads.
    """

    def has(self, key: bytes) -> bool: ...

    def get(self, key: bytes) -> bytes: ...

    def put(self, key: bytes, value: bytes) -> None: ...

    def delete(self, key: bytes) -> None: ...

    def count(self) -> int: ...

    def items(self) -> Iterator[Tuple[bytes, bytes]]: ...

    def close(self) -> None: ...
