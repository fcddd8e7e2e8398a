"""Sample component sources shared by pipeline, CLI and service tests."""

from __future__ import annotations

from typing import Dict

BUTTON_SOURCE = """
import React from 'react';
import { TouchableOpacity, Text, StyleSheet } from 'react-native';

interface ButtonProps {
  title: string;
}

export const Button = ({ title }: ButtonProps) => (
  <TouchableOpacity style={styles.button}>
    <Text>{title}</Text>
  </TouchableOpacity>
);

const styles = StyleSheet.create({
  button: {
    backgroundColor: '#007AFF',
  },
});
"""

CARD_SOURCE = """
import React from 'react';

export const Card = ({ children }: { children: React.ReactNode }) => (
  <div className="bg-white rounded-lg">{children}</div>
);
"""


def sample_components() -> Dict[str, str]:
    """Return one react-native button and one tailwind card under src/components."""
    return {
        "src/components/Button.tsx": BUTTON_SOURCE,
        "src/components/Card.tsx": CARD_SOURCE,
    }


__all__ = ["BUTTON_SOURCE", "CARD_SOURCE", "sample_components"]
