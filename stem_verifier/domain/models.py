"""Domain models for the verification engine.

All models use Pydantic for validation, serialization, and type safety.
Nothing here outlives a single verification call.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ============================================================================
# Requests
# ============================================================================


class Domain(str, Enum):
    """Verification categories a request can be routed to."""

    MATH = "MATH"
    CHEMISTRY = "CHEMISTRY"
    CODE = "CODE"


class VerificationMethod(str, Enum):
    """Method that produced a result (NONE when no verifier ran)."""

    MATH = "MATH"
    CHEMISTRY = "CHEMISTRY"
    CODE = "CODE"
    NONE = "NONE"


class TestCase(BaseModel):
    """Single stdin/expected-stdout pair for a sandbox run."""

    __test__ = False  # not a pytest test class

    input: str = Field(default="", description="Data fed to the program on stdin")
    expected_output: str | None = Field(
        default=None, description="Exact stdout the program must produce"
    )

    model_config = ConfigDict(frozen=True)


class VerificationRequest(BaseModel):
    """One item to verify, owned by the caller."""

    content: str = Field(description="Free-form text, markdown or code to verify")
    domain: Domain = Field(description="Verification domain selecting the verifier")
    test_cases: list[TestCase] | None = Field(
        default=None, description="Optional test cases (CODE only)"
    )

    model_config = ConfigDict(frozen=True)


# ============================================================================
# Parsed queries
# ============================================================================


class MathOperation(str, Enum):
    EVALUATE = "evaluate"
    SIMPLIFY = "simplify"
    SOLVE = "solve"
    INTEGRATE = "integrate"
    DIFFERENTIATE = "differentiate"
    VERIFY = "verify"


class MathQuery(BaseModel):
    """Math request split into an operation and the bare expression."""

    expression: str
    operation: MathOperation

    model_config = ConfigDict(frozen=True)


class ChemistryOperation(str, Enum):
    BALANCE = "balance"
    STRUCTURE = "structure"
    REACTION = "reaction"
    VALIDATE_MECHANISM = "validate_mechanism"
    PROPERTIES = "properties"


class ChemistryQuery(BaseModel):
    """Chemistry request with its operation and the equation text."""

    equation: str = Field(description="Content with any leading instruction removed")
    operation: ChemistryOperation

    model_config = ConfigDict(frozen=True)


class Language(str, Enum):
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    CPP = "cpp"
    JAVA = "java"


class CodeQuery(BaseModel):
    """Code extracted from content together with its detected language.

    ``unsupported_language`` holds the raw fence marker when the content named
    a language the engine cannot verify; ``language`` is None in that case.
    """

    code: str
    language: Language | None
    unsupported_language: str | None = None
    test_cases: list[TestCase] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


# ============================================================================
# Result payloads (tagged by ``kind``)
# ============================================================================


class MathPodsPayload(BaseModel):
    """Named result sections returned by the symbolic-math oracle."""

    kind: Literal["math_pods"] = "math_pods"
    pods: dict[str, str] = Field(default_factory=dict, description="Pod title -> plaintext")

    model_config = ConfigDict(frozen=True)


class ArithmeticPayload(BaseModel):
    """Locally evaluated binary arithmetic."""

    kind: Literal["arithmetic"] = "arithmetic"
    expression: str
    value: float

    model_config = ConfigDict(frozen=True)


class BalancePayload(BaseModel):
    """Atom counts on both sides of a chemical equation."""

    kind: Literal["balance"] = "balance"
    balanced: bool
    reactant_atoms: dict[str, int]
    product_atoms: dict[str, int]

    model_config = ConfigDict(frozen=True)


class SandboxPayload(BaseModel):
    """Verdict of a sandbox run."""

    kind: Literal["sandbox"] = "sandbox"
    status: str | None = None
    stdout: str | None = None
    stderr: str | None = None
    compile_output: str | None = None
    time: str | None = None
    memory: int | None = None

    model_config = ConfigDict(frozen=True)


class SyntaxCheckPayload(BaseModel):
    """Issues found by the local syntax linter."""

    kind: Literal["syntax_check"] = "syntax_check"
    language: Language
    issues: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


VerificationPayload = Annotated[
    Union[MathPodsPayload, ArithmeticPayload, BalancePayload, SandboxPayload, SyntaxCheckPayload],
    Field(discriminator="kind"),
]

PAYLOAD_KINDS_BY_METHOD: dict[VerificationMethod, frozenset[str]] = {
    VerificationMethod.MATH: frozenset({"math_pods", "arithmetic"}),
    VerificationMethod.CHEMISTRY: frozenset({"balance"}),
    VerificationMethod.CODE: frozenset({"sandbox", "syntax_check"}),
    VerificationMethod.NONE: frozenset(),
}


# ============================================================================
# Final Output
# ============================================================================


class Correction(BaseModel):
    """Suggested fix attached to a failed verification."""

    original: str
    corrected: str
    explanation: str

    model_config = ConfigDict(frozen=True)


class VerificationResult(BaseModel):
    """The engine's single output type."""

    verified: bool = Field(description="True only if correctness was positively confirmed")
    method: VerificationMethod = Field(description="Verifier that produced this result")
    input: str = Field(description="Echo of the original content")
    result: VerificationPayload | None = Field(
        default=None, description="Domain-specific payload, tagged by kind"
    )
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence in the verdict")
    error_message: str | None = Field(default=None, description="Why verification failed")
    corrections: list[Correction] | None = Field(default=None, description="Suggested fixes")
    execution_time_ms: int = Field(
        default=0, ge=0, description="Wall time from dispatcher entry to return"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _payload_matches_method(self) -> "VerificationResult":
        if self.result is not None and self.result.kind not in PAYLOAD_KINDS_BY_METHOD[self.method]:
            raise ValueError(
                f"payload kind {self.result.kind!r} is not valid for method {self.method.value}"
            )
        return self

    @classmethod
    def failure(
        cls,
        method: VerificationMethod,
        content: str,
        error_message: str,
        confidence: float = 0.0,
    ) -> "VerificationResult":
        """Build an unverified result without a payload."""
        return cls(
            verified=False,
            method=method,
            input=content,
            result=None,
            confidence=confidence,
            error_message=error_message,
        )
