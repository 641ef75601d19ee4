"""Prompt templates for validation and grading feedback."""

import re
from dataclasses import dataclass, field
from typing import Any

_VARIABLE = re.compile(r"\{(\w+)\}")


@dataclass
class PromptTemplate:
    """A template for generating AI prompts."""

    name: str
    content: str
    _variables: set[str] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self):
        """Extract variables from template content."""
        self._variables = set(_VARIABLE.findall(self.content))

    @property
    def variables(self) -> set[str]:
        """Get the set of variables in this template."""
        return self._variables.copy()

    def render(self, **kwargs: Any) -> str:
        """Render the template with provided variables.

        Substitution is a single pass, so braces inside the values are
        left untouched.

        Args:
            **kwargs: Variable values to substitute

        Returns:
            Rendered prompt string

        Raises:
            ValueError: If required variables are missing
        """
        missing = self._variables - set(kwargs.keys())
        if missing:
            raise ValueError(f"Missing required variables: {missing}")

        return _VARIABLE.sub(lambda m: str(kwargs[m.group(1)]), self.content)


NO_ISSUES_MESSAGE = "Ingen formelle feil funnet."

VALIDATION_FEEDBACK_HEADER = "Tilbakemelding om validering: \n\n"

SCORE_LINE_FORMAT = "Foreslått poengsum: X av Y"

VALIDATION_FEEDBACK = PromptTemplate(
    name="validation_feedback",
    content=(
        "Du har mottatt en liste med HTML/CSS/JS-valideringsfeil og advarsler fra en W3C Validator. "
        "For hver feilmelding, vennligst gi en kort forklaring på hva feilen betyr og et eksempel på "
        "hvordan man kan fikse det. "
        "Forklaringen skal IKKE formuleres som 'Feilmeldingen indikerer at ...', men heller en direkte, "
        "kort og konsis forklaring. "
        "Når du omtaler begreper innen HTML, CSS, og JS, som for eksempel 'table' etc., sørg for å bruke "
        "de engelske begrepene. "
        "IKKE gjenfortell feilmeldingen. Forklar kun hva feilen betyr. "
        "IKKE list opp feilene som en punktliste, men skriv en sammenhengende tekst med nye linjer mellom feil. "
        f"DERSOM det ikke er noen feilmeldinger, skriv '{NO_ISSUES_MESSAGE.rstrip('.')}'. "
        "Hold eksempelet så kort som mulig (maks 1-5 linjer). "
        "Bruk 'de' og 'dere' i flertall for å referere til studentene, ikke 'studentene'. "
        "Avslutt svaret ditt med følgende setning: 'Det anbefales å bruke W3 Validator for å sjekke at "
        "HTML, CSS og JS oppfyller beste praksis.'. "
        "Svarene skal være på norsk.\n\nFeilmeldinger:\n\n{issues}"
    ),
)

GRADING_FEEDBACK = PromptTemplate(
    name="grading_feedback",
    content=(
        "Du er sensor i et emne om webutvikling og skal vurdere en studentbesvarelse. "
        "Nedenfor finner du oppgavebeskrivelsen, vurderingskriteriene og all HTML-, CSS- og "
        "JavaScript-kode studentene har levert.\n\n"
        "Skriv en kvalitativ tilbakemelding på norsk. Påpek hva som er godt løst og hva som kan "
        "forbedres, med henvisning til vurderingskriteriene og konkrete steder i koden. "
        "Bruk 'de' og 'dere' i flertall for å referere til studentene. "
        "Avslutt tilbakemeldingen med en egen linje på formen "
        f"'{SCORE_LINE_FORMAT}', der X er foreslått poengsum og Y er maksimal poengsum "
        "ifølge vurderingskriteriene.\n\n"
        "Oppgavebeskrivelse:\n\n{description}\n\n"
        "Vurderingskriterier:\n\n{criteria}\n\n"
        "Studentenes kode:\n\n{code}"
    ),
)
