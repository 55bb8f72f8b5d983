from versionfusion.analyzers.ai_analyzer import AIAnalyzer
from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.analyzers.code_analyzer import CodeChangeAnalyzer
from versionfusion.analyzers.commit_analyzer import CommitMessageAnalyzer
from versionfusion.analyzers.dependency_analyzer import DependencyChangeAnalyzer
from versionfusion.analyzers.rule_analyzer import RuleBasedAnalyzer

__all__ = [
    "AIAnalyzer",
    "BaseAnalyzer",
    "CodeChangeAnalyzer",
    "CommitMessageAnalyzer",
    "DependencyChangeAnalyzer",
    "RuleBasedAnalyzer",
]
