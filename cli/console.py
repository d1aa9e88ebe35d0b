"""Console UI for the sight words game."""

import time

from cli.api_client import SightWordsAPIClient

POLL_SECONDS = 0.2
COMMANDS = 'Commands: "status" for score, "end" to stop, "restart" to start over, "exit" to quit'


class ConsoleUI:
    """Console user interface for the sight words game."""

    def __init__(self, client: SightWordsAPIClient):
        self.client = client

    def wait_while(self, predicate, timeout: float = 10.0) -> dict:
        """Poll the session until predicate(state) is false."""
        state = self.client.get_state()
        deadline = time.monotonic() + timeout
        while predicate(state) and time.monotonic() < deadline:
            time.sleep(POLL_SECONDS)
            state = self.client.get_state()
        return state

    def print_grid(self, slots: list):
        """Print the 2x2 option grid. The blank cell is shown as dots."""
        labels = []
        number = 1
        for slot in slots:
            if slot is None:
                labels.append('   ....   ')
            else:
                labels.append(f'{number}) {slot}'.ljust(10))
                number += 1
        print(f'  {labels[0]}  {labels[1]}')
        print(f'  {labels[2]}  {labels[3]}')

    def print_stats(self, stats: dict, label: str = ''):
        print('-' * 40)
        if label:
            print(label)
        print(f"Score: {stats['score']} | Streak: {stats['streak']} | Best: {stats['best_streak']}")
        print('-' * 40)

    def print_summary(self, state: dict):
        """Print the end-of-session summary."""
        stats = state['stats']
        print('\n' + '=' * 40)
        print('SESSION SUMMARY')
        print('=' * 40)
        if state.get('no_content'):
            print('No words available for this sport yet.')
        print(f"  Score:       {stats['score']}")
        print(f"  Answered:    {stats['total_answered']}")
        print(f"  Correct:     {stats['correct_count']}")
        print(f"  Incorrect:   {stats['incorrect_count']}")
        print(f"  Accuracy:    {stats['accuracy_percent']}%")
        print(f"  Best streak: {stats['best_streak']}")
        print('=' * 40 + '\n')

    def choose_sport(self) -> str | None:
        sports = self.client.get_sports()
        print('\nChoose a sport:')
        for i, sport in enumerate(sports, 1):
            print(f"  {i}) {sport['display_name']} ({sport['round_count']} words)")
        while True:
            choice = input('==> ').strip().lower()
            if choice == 'exit':
                return None
            if choice.isdigit() and 1 <= int(choice) <= len(sports):
                return sports[int(choice) - 1]['sport']
            for sport in sports:
                if choice == sport['sport']:
                    return sport['sport']
            print('Pick a number from the list.')

    def read_answer(self, state: dict) -> str | None:
        """Ask for an answer. Returns None when a command was handled instead."""
        user_input = input('==> ').strip()
        command = user_input.lower()
        if command == 'status':
            self.print_stats(state['stats'], state['progress_label'])
            return None
        if command == 'end':
            self.client.end_session()
            return None
        if command == 'restart':
            self.client.restart()
            return None
        if command == 'exit':
            raise KeyboardInterrupt
        if state['phase'] == 'pick' and user_input.isdigit():
            options = [s for s in state['grid_slots'] if s is not None]
            index = int(user_input) - 1
            if 0 <= index < len(options):
                return options[index]
        return user_input

    def play_round(self, state: dict):
        round = state['current_round']
        print(f"\n[{state['progress_label']}]")
        if state['prompt_visible']:
            print(f"\n    >>> {round['prompt_word'].upper()} <<<\n")
            print('Look fast...')
            state = self.wait_while(lambda s: s['phase'] != 'complete' and s['prompt_visible'])
            print('\n' * 3)
            print('Now pick from memory!' if state['phase'] == 'pick' else 'Now spell it!')

        if state['phase'] == 'complete':
            return
        if state['phase'] == 'pick':
            self.print_grid(state['grid_slots'])

        answer = self.read_answer(state)
        if answer is None:
            return

        if state['phase'] == 'pick':
            result = self.client.submit_pick(answer)
        else:
            result = self.client.submit_spelling(answer)

        if not result['ok']:
            print(result['message'])
            return
        if result['correct']:
            print('*** Correct! ***')
        else:
            print(result['message'])
        self.print_stats(result['state']['stats'])
        self.wait_while(lambda s: s['awaiting_advance'])

    def run(self):
        """Run the main application loop."""
        try:
            health = self.client.health_check()
            print(f"Connected to sight words server ({health['service']})")
        except Exception:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        settings = self.client.get_settings()
        print(f"Difficulty: {settings['display_name']} ({settings['seconds_visible']}s to look)")
        print(COMMANDS)

        while True:
            sport = self.choose_sport()
            if sport is None:
                print('Goodbye!')
                return
            self.client.start(sport)

            while True:
                state = self.client.get_state()
                if state['phase'] == 'complete':
                    self.print_summary(state)
                    break
                try:
                    self.play_round(state)
                except KeyboardInterrupt:
                    self.client.end_session()
                    print('Goodbye!')
                    return
