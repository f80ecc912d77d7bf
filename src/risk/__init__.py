from src.risk.engine import check_honeypot, check_rug_pull, check_token, classify, score
from src.risk.models import ContractInfo, Risk, RiskLevel, Severity, TokenCheck, TokenInfo
from src.risk.normalizer import normalize
from src.risk.rules import RULES, Rule, evaluate_risks

__all__ = [
    "ContractInfo",
    "TokenInfo",
    "Risk",
    "RiskLevel",
    "Severity",
    "TokenCheck",
    "Rule",
    "RULES",
    "normalize",
    "evaluate_risks",
    "score",
    "classify",
    "check_honeypot",
    "check_rug_pull",
    "check_token",
]
