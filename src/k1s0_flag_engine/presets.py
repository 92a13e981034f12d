"""組み込みのフラグセット"""

from __future__ import annotations

from .models import Environment, FlagDefinition


def _beta(key: str, name: str, description: str, rollout_percentage: int) -> FlagDefinition:
    return FlagDefinition(
        key=key,
        name=name,
        description=description,
        enabled=True,
        rollout_percentage=rollout_percentage,
        environment=Environment.BETA,
    )


def beta_flags() -> list[FlagDefinition]:
    """ベータ環境向けのフラグ。"""
    return [
        _beta(
            "enhanced_analytics",
            "Enhanced Analytics",
            "Advanced analytics dashboard with user behavior tracking",
            100,
        ),
        _beta(
            "feedback_collection",
            "In-App Feedback Collection",
            "Contextual feedback forms throughout the application",
            100,
        ),
        _beta(
            "performance_monitoring",
            "Real-time Performance Monitoring",
            "Enhanced performance metrics and monitoring",
            100,
        ),
        _beta(
            "bug_reporting",
            "Integrated Bug Reporting",
            "Built-in bug reporting with automatic environment capture",
            100,
        ),
        _beta(
            "ai_insights_v2",
            "AI Insights V2",
            "Next generation AI-powered test insights",
            50,
        ),
        _beta(
            "team_collaboration",
            "Enhanced Team Collaboration",
            "Advanced team collaboration features",
            75,
        ),
        _beta(
            "custom_dashboards",
            "Custom Dashboards",
            "User-customizable dashboard layouts",
            25,
        ),
    ]


def development_flags() -> list[FlagDefinition]:
    """開発環境向けのフラグ（ベータのフラグ + debug_mode）。"""
    return [
        *beta_flags(),
        FlagDefinition(
            key="debug_mode",
            name="Debug Mode",
            description="Enable debug logging and development tools",
            enabled=True,
            rollout_percentage=100,
            environment=Environment.DEVELOPMENT,
        ),
    ]


def production_flags() -> list[FlagDefinition]:
    """本番環境向けのフラグ。段階的に公開する。"""
    return [
        FlagDefinition(
            key="enhanced_analytics",
            name="Enhanced Analytics",
            description="Advanced analytics dashboard with user behavior tracking",
            enabled=True,
            rollout_percentage=100,
        ),
        FlagDefinition(
            key="feedback_collection",
            name="In-App Feedback Collection",
            description="Contextual feedback forms throughout the application",
            enabled=True,
            rollout_percentage=50,
        ),
        FlagDefinition(
            key="ai_insights_v2",
            name="AI Insights V2",
            description="Next generation AI-powered test insights",
            enabled=False,
            rollout_percentage=0,
        ),
    ]


def flags_for_environment(environment: Environment | str) -> list[FlagDefinition]:
    """環境に対応する組み込みフラグを返す。"""
    env = Environment(environment)
    if env == Environment.BETA:
        return beta_flags()
    if env == Environment.DEVELOPMENT:
        return development_flags()
    return production_flags()
