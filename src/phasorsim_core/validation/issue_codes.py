# src/phasorsim_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class SemanticIssueCode(Enum):
    """
    Registry of semantic validation issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Ground Issues (GND_...) ---
    GND_MISSING = ("GND_MISSING", "The schematic has no ground symbol, so there is no reference node to measure voltages against.")
    GND_MULTIPLE = ("GND_MULTIPLE", "{count} ground symbols ({ground_ids}) are merged into the single reference node '0'.")

    # --- Component Value Issues (VALUE_...) ---
    VALUE_NEGATIVE = ("VALUE_NEGATIVE", "Component '{component_id}' ({kind}) has a negative value {value}.")
    VALUE_NONFINITE = ("VALUE_NONFINITE", "Component '{component_id}' ({kind}) has a non-finite value {value}.")

    # --- Connectivity Issues (NET_/HANDLE_/COMP_...) ---
    NET_FLOATING = ("NET_FLOATING", "Node '{node}' has no conductive path to the reference node; the system will be singular.")
    HANDLE_UNUSED_WIRED = ("HANDLE_UNUSED_WIRED", "Wire {source} -> {target} is attached to handle '{handle}' of '{component_id}', which has no electrical terminal; it is ignored.")
    COMP_SHORTED = ("COMP_SHORTED", "All terminals of component '{component_id}' ({kind}) sit on node '{node}'; it has no effect on the circuit.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name}: '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
