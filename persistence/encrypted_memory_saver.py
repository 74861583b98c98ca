import pickle
from typing import Any, Iterable, Optional, Sequence, Tuple
from langgraph.checkpoint.memory import InMemorySaver
from langgraph.graph import START
from langchain_core.runnables import RunnableConfig
from langgraph.checkpoint.base import (
    ChannelVersions,
    Checkpoint,
    CheckpointMetadata,
    CheckpointTuple,
)

from registration.state import SECRET_FIELDS
from .crypto import FieldCipher


class EncryptedInMemorySaver(InMemorySaver):
    """
    Draft store for the registration flow. Secret form fields are sealed
    with AES-GCM before langgraph serializes them, both in checkpoints and
    in pending writes, and opened again on read.
    """

    def __init__(
        self,
        cipher: FieldCipher,
        encrypt_keys: Iterable[str] = SECRET_FIELDS,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.cipher = cipher
        self.encrypt_keys = frozenset(encrypt_keys)

    @staticmethod
    def _aad(config: RunnableConfig) -> bytes:
        thread_id = config["configurable"]["thread_id"]
        checkpoint_ns = config["configurable"].get("checkpoint_ns", "")
        return f"{thread_id}|{checkpoint_ns}|channel_values".encode("utf-8")

    def _keys_for(self, config: RunnableConfig) -> frozenset:
        keys = config["configurable"].get("encrypt_keys")
        return frozenset(keys) if keys is not None else self.encrypt_keys

    def _seal(self, values: dict, aad: bytes, encrypt_keys: frozenset) -> dict:
        sealed = {}
        for k, v in values.items():
            key_aad = aad + b"|" + k.encode()
            if self.cipher.should_encrypt(k, encrypt_keys):
                raw = pickle.dumps(v, protocol=pickle.HIGHEST_PROTOCOL)
                sealed[k] = {"__enc__": self.cipher.encrypt_bytes(raw, key_aad), "__fmt__": "pickle"}
            elif k == START and isinstance(v, dict):
                # graph input arrives as one dict on the __start__ channel
                sealed[k] = self._seal(v, key_aad, encrypt_keys)
            else:
                sealed[k] = v
        return sealed

    def _open(self, values: dict, aad: bytes) -> dict:
        opened = {}
        for k, v in values.items():
            key_aad = aad + b"|" + k.encode()
            if isinstance(v, dict) and "__enc__" in v:
                raw = self.cipher.decrypt_bytes(v["__enc__"], key_aad)
                opened[k] = pickle.loads(raw)
            elif k == START and isinstance(v, dict):
                opened[k] = self._open(v, key_aad)
            else:
                opened[k] = v
        return opened

    def put(
        self,
        config: RunnableConfig,
        checkpoint: Checkpoint,
        metadata: CheckpointMetadata,
        new_versions: ChannelVersions,
    ) -> RunnableConfig:
        cp = dict(checkpoint)
        channel_values = cp.get("channel_values", {})
        cp["channel_values"] = self._seal(channel_values, self._aad(config), self._keys_for(config))

        return super().put(config, cp, metadata, new_versions)

    def put_writes(
        self,
        config: RunnableConfig,
        writes: Sequence[Tuple[str, Any]],
        task_id: str,
        task_path: str = "",
    ) -> None:
        aad = self._aad(config)
        encrypt_keys = self._keys_for(config)
        sealed = [
            (channel, self._seal({channel: value}, aad, encrypt_keys)[channel])
            for channel, value in writes
        ]
        super().put_writes(config, sealed, task_id, task_path)

    def _decrypt_tuple(self, t: CheckpointTuple) -> CheckpointTuple:
        aad = self._aad(t.config)

        cp = dict(t.checkpoint)
        cv = cp.get("channel_values", {})
        if isinstance(cv, dict):
            cp["channel_values"] = self._open(cv, aad)

        pending = t.pending_writes
        if pending:
            pending = [
                (task_id, channel, self._open({channel: value}, aad)[channel])
                for task_id, channel, value in pending
            ]

        return t._replace(checkpoint=cp, pending_writes=pending)

    def get_tuple(self, config: RunnableConfig) -> Optional[CheckpointTuple]:
        t = super().get_tuple(config)
        if t is None:
            return None
        return self._decrypt_tuple(t)

    def list(self, config: Optional[RunnableConfig], *args, **kwargs):
        for t in super().list(config, *args, **kwargs):
            yield self._decrypt_tuple(t)
