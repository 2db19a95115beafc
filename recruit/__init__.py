"""Recruitment portal: positions, questions and applications."""
