"""Erreurs du domaine block_composer."""


class BlockComposerError(Exception):
    """Erreur de base du moteur de composition."""


class InvariantViolation(BlockComposerError):
    """Une séquence de blocs viole un invariant (ordre, identité, médias)."""


class UploadError(BlockComposerError):
    """Échec du collaborateur d'upload — aucun média n'a été ajouté."""

    def __init__(self, block_id: str, message: str):
        super().__init__(f"Upload échoué pour {block_id} : {message}")
        self.block_id = block_id
