class ModificationTypeNotSupported(ValueError):
    """
    Exception raised when a modification type code is not recognized.

    Attributes
    ----------
    parameter : str
        The provided modification type code.
    allowed_values : list
        The list of allowed modification type codes.
    """
    def __init__(self, parameter, allowed_values):
        """
        Initialize the exception with the provided parameter and allowed values.

        Parameters
        ----------
        parameter : str
            The provided modification type code.
        allowed_values : list
            The list of allowed modification type codes.
        """
        self.parameter = parameter
        self.allowed_values = allowed_values
        super().__init__(f"Invalid modification type: {parameter}. Allowed values are: {allowed_values}")

class CleavageAgentNotSupported(ValueError):
    """
    Exception raised when a cleavage agent (enzyme) is not supported.

    Attributes
    ----------
    parameter : str
        The provided cleavage agent label.
    allowed_values : list
        The list of allowed cleavage agent labels.
    """
    def __init__(self, parameter, allowed_values):
        self.parameter = parameter
        self.allowed_values = allowed_values
        super().__init__(f"Invalid cleavage agent: {parameter}. Allowed values are: {allowed_values}")

class InvalidResidueLocation(ValueError):
    """
    Exception raised when a modification is placed outside of the peptide.

    Attributes
    ----------
    position : int
        The offending residue location (1-based).
    sequence : str
        The clean peptide sequence.
    """
    def __init__(self, position, sequence):
        self.position = position
        self.sequence = sequence
        super().__init__(
            f"Invalid residue location {position} for peptide '{sequence}'; must be between 1 and {len(sequence)}."
        )

class UnresolvedNumericModification(ValueError):
    """
    Exception raised when a peptide still holds a numeric modification mass
    that could not be associated with a modification symbol.
    """
    def __init__(self, result_id, mass_text):
        self.result_id = result_id
        self.mass_text = mass_text
        super().__init__(
            f"Search result contains a numeric mod mass that could not be associated with a modification symbol; ResultID = {result_id}, ModMass = {mass_text}"
        )

class RegistryNotInitialized(ValueError):
    """
    Exception raised when results are processed with a modification registry
    that failed to load its definitions.
    """
    def __init__(self, message):
        super().__init__(
            f"The modification registry failed to initialize: {message}"
        )
