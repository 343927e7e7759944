from kubetoken.cache.file_store import FileByteStore
from kubetoken.cache.protocol import ByteStore, TokenSink
from kubetoken.cache.token_cache import KubeTokenCache

__all__ = ["ByteStore", "FileByteStore", "KubeTokenCache", "TokenSink"]
