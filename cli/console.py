"""Console UI for monstruo application."""

from core.config import LANGUAGE, OKAY_THRESHOLD
from cli.api_client import MonstruoAPIClient

LABEL_MESSAGES = {
    'perfect': '¡Perfecto!',
    'good': '¡Bien!',
    'okay': 'Okay',
    'miss': 'Miss',
    'no-input': 'No input'
}


class ConsoleUI:
    """Console user interface: typed words stand in for the microphone."""

    def __init__(self, client: MonstruoAPIClient, confidence: float = 1.0, practice: bool = None):
        self.client = client
        self.confidence = confidence
        self.practice = practice

    def print_hud(self, status: dict):
        """Print HP, level and the word to say."""
        print('=' * 60)
        print(f"HP: {status['hearts'] or '-'}   |   {status['level_label']}   |   {status['progress_display']}")
        translation = f" ({status['translation']})" if status['translation'] else ''
        print(f'Word: "{status["word"]}"{translation}')
        if status['hint']:
            print(f"Hint: {status['hint']}")
        print('=' * 60)

    def print_outcome(self, outcome: dict):
        """Print the result of one attempt."""
        grade = outcome['grade']
        if outcome['kind'] == 'ignored':
            print('The encounter is over. Type "restart" to play again.')
            return
        label = LABEL_MESSAGES.get(grade['label'], grade['label']) if grade else ''
        if outcome['kind'] == 'hit':
            print(f"*** HIT! {label} (score {grade['score100']}) combo x{outcome['combo_streak']} ***")
        else:
            print(f"--- {label} (score {grade['score100'] if grade else 0}). The monster advances! ---")
            if outcome['said']:
                print(f"    You said: {outcome['said']}")

        if outcome['level_changed'] and outcome['next_word']:
            print("\n*** LEVEL COMPLETE! ***\n")
        if outcome['run_complete']:
            print(f"\n*** Dungeon cleared! Accuracy {outcome['accuracy']}% ***\n")
        if outcome['game_over']:
            print("\n*** GAME OVER ***\n")

    def print_status(self, status: dict):
        """Print detailed status."""
        print('\n' + '=' * 50)
        print('STATUS SUMMARY')
        print('=' * 50)
        print(f"\nLanguage: {LANGUAGE}")
        print(f"{status['level_label']} ({status['level_index'] + 1}/{status['level_count']})")
        print(f"Practice mode: {'on' if status['practice'] else 'off'}")
        print(f"HP: {status['hp']}/{status['max_hp']}")
        print(f"Combo: {status['combo_streak']} (best {status['best_combo']})")
        print(f"Accuracy: {status['accuracy']}% ({status['total_hits']}/{status['total_attempts']})")
        print(f"Monster speed: step {status['tuning']['monsterStepPx']}px, "
              f"advance {status['tuning']['advanceDurationMs']}ms")
        print('\n' + '=' * 50 + '\n')

    def print_levels(self, levels: list):
        for level in levels:
            print(f"  {level['id']}. {level['name']} - {level['correct_needed']} of {level['word_count']} words")

    def run(self):
        """Run the main game loop."""
        try:
            health = self.client.health_check()
            print(f"Connected to monstruo server ({health['service']})")
        except Exception as e:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        status = self.client.new_session(practice=self.practice)
        print(f'\nDefeat the monster by saying {LANGUAGE} words!')
        print(f'Scores of {int(OKAY_THRESHOLD * 100)}+ hit the monster; anything else lets it advance.')
        print('Commands: "status", "levels", "restart", "exit"\n')

        while True:
            self.print_hud(status)
            user_input = input('🎤 ==> ').strip()

            if user_input.lower() == 'exit':
                print('¡Adiós!')
                return

            elif user_input.lower() == 'status':
                try:
                    self.print_status(self.client.get_status())
                except Exception as e:
                    print(f"Error getting status: {e}")
                continue

            elif user_input.lower() == 'levels':
                try:
                    self.print_levels(self.client.get_levels())
                except Exception as e:
                    print(f"Error getting levels: {e}")
                continue

            elif user_input.lower() == 'restart':
                status = self.client.new_session(practice=self.practice)
                continue

            try:
                outcome = self.client.submit_recognition(user_input, self.confidence)
                self.print_outcome(outcome)
                status = self.client.get_status()
            except Exception as e:
                print(f"Error submitting word: {e}")
